"""Field input and scan result data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional


@dataclass(frozen=True)
class FieldInput:
    """One named value to scan.

    ``content_type == "html"`` together with ``allowed_tags`` lets the listed
    tags through the dangerous-tag check of the XSS category.
    """

    name: str
    value: Optional[str] = None
    content_type: Optional[str] = None
    allowed_tags: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "FieldInput":
        """Build from a record; accepts ``type`` as an alias of ``content_type``."""
        tags = data.get("allowed_tags", data.get("allowedTags"))
        return cls(
            name=str(data.get("name", "")),
            value=data.get("value"),
            content_type=data.get("content_type", data.get("type")),
            allowed_tags=[str(t).lower() for t in tags] if tags else None,
        )

    @property
    def is_html(self) -> bool:
        return self.content_type == "html"


@dataclass
class Threat:
    """A single pattern match (or the obfuscation check) inside one field."""

    subtype: str
    severity: str
    pattern_source: str
    matched_text: str
    offset: int
    recommendation: str
    category: Optional[str] = None  # None for HIDDEN_CHAR_OBFUSCATION


@dataclass
class FieldScan:
    """Internal result of scanning one field."""

    threats: List[Threat] = field(default_factory=list)
    scanned: bool = False


@dataclass
class FieldResult:
    """Per-field outcome returned to callers."""

    name: str
    security_score: float = 1.0
    passed: bool = True
    threats: List[Threat] = field(default_factory=list)
    scanned: bool = False
    value: Optional[str] = None
    include_value: bool = field(default=False, repr=False)


@dataclass
class ScanResult:
    """Complete result of a scan run."""

    security_score: float = 1.0
    scanner_label: str = "all"
    passed: bool = True
    duration_ms: float = 0.0
    fields: List[FieldResult] = field(default_factory=list)

    @property
    def threats(self) -> List[Threat]:
        return [t for f in self.fields for t in f.threats]

    @property
    def total_threats(self) -> int:
        return sum(len(f.threats) for f in self.fields)

    @property
    def failed_fields(self) -> List[FieldResult]:
        return [f for f in self.fields if not f.passed]
