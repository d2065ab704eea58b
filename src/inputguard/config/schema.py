"""Configuration schema — scanner config, categories, and host config sections."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from inputguard.rules.models import Pattern

Severity = Literal["LOW", "MEDIUM", "HIGH"]

SEVERITY_ORDER: dict[str, int] = {
    "LOW": 0,
    "MEDIUM": 1,
    "HIGH": 2,
}


def elevate(severity: str, strict_mode: bool) -> str:
    """Strict mode reports MEDIUM as HIGH; nothing else changes."""
    if strict_mode and severity == "MEDIUM":
        return "HIGH"
    return severity


class Category(str, Enum):
    SQL_INJECTION = "sqlInjection"
    NOSQL_INJECTION = "noSqlInjection"
    XSS = "xss"
    PATH_TRAVERSAL = "pathTraversal"
    TOKEN_LEAKAGE = "tokenLeakage"


# Scan order for a full scan.
ALL_CATEGORIES: Tuple[Category, ...] = tuple(Category)


class InvalidCategoryError(ValueError):
    """Raised when a category name is not one of the five known categories."""


def parse_category(value: object) -> Category:
    """Validate *value* and return the matching Category."""
    if isinstance(value, Category):
        return value
    try:
        return Category(value)
    except ValueError:
        raise InvalidCategoryError(f"Invalid scanner type: {value}") from None


@dataclass(frozen=True)
class ScannerConfig:
    """Immutable per-scanner settings.

    ``custom_patterns`` is keyed by category; entries are appended after the
    built-in patterns of that category and never replace them.
    """

    strict_mode: bool = False
    stop_on_first_threat: bool = False
    include_value_in_response: bool = False
    custom_patterns: Mapping[Category, Tuple["Pattern", ...]] = field(
        default_factory=dict
    )

    def __post_init__(self) -> None:
        frozen: Dict[Category, Tuple["Pattern", ...]] = {}
        for key, patterns in dict(self.custom_patterns).items():
            category = parse_category(key)
            frozen[category] = frozen.get(category, ()) + tuple(patterns)
        object.__setattr__(self, "custom_patterns", MappingProxyType(frozen))


# --- host-side (.inputguard.toml) sections ---


@dataclass
class ScannerSection:
    strict_mode: bool = False
    stop_on_first_threat: bool = False
    include_value_in_response: bool = False
    categories: List[str] = field(default_factory=list)  # empty = all


@dataclass
class OutputSection:
    format: Literal["terminal", "json"] = "terminal"
    show_summary: bool = True
    redact_tokens: bool = True  # hide leaked credentials in reports


@dataclass
class PatternsSection:
    directory: str = ".inputguard-patterns"


@dataclass
class InputGuardConfig:
    version: str = "1.0"
    scanner: ScannerSection = field(default_factory=ScannerSection)
    output: OutputSection = field(default_factory=OutputSection)
    patterns: PatternsSection = field(default_factory=PatternsSection)

    def selected_categories(self) -> List[Category]:
        return [parse_category(c) for c in self.scanner.categories]

    def to_scanner_config(
        self,
        custom_patterns: Optional[Mapping[Category, Sequence["Pattern"]]] = None,
    ) -> ScannerConfig:
        return ScannerConfig(
            strict_mode=self.scanner.strict_mode,
            stop_on_first_threat=self.scanner.stop_on_first_threat,
            include_value_in_response=self.scanner.include_value_in_response,
            custom_patterns=dict(custom_patterns or {}),
        )
