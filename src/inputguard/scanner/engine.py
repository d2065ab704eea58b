"""Core scan engine — normalizes each field and runs the category patterns over it.

A :class:`Scanner` holds only its immutable :class:`ScannerConfig` and the
pattern registry built from it, so one instance can serve any number of
concurrent scans.

Exception safety: unexpected failures inside the scan loop surface as
:class:`ScanError`, whose message never contains field values.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from inputguard.config.loader import ConfigError
from inputguard.config.schema import (
    ALL_CATEGORIES,
    Category,
    ScannerConfig,
    elevate,
    parse_category,
)
from inputguard.findings.models import FieldInput, FieldResult, FieldScan, ScanResult, Threat
from inputguard.findings.scoring import all_clear, field_score, overall_score
from inputguard.rules.recommendations import HIDDEN_CHAR_RECOMMENDATION, recommendation_for
from inputguard.rules.registry import PatternRegistry
from inputguard.scanner.normalizer import contains_hidden_chars, normalize
from inputguard.scanner.suppression import HtmlAllowlist

logger = logging.getLogger(__name__)

HIDDEN_CHAR_SUBTYPE = "HIDDEN_CHAR_OBFUSCATION"
HIDDEN_CHAR_SOURCE = "invisible-unicode"


class ScanError(Exception):
    """Raised on internal scanner error (never contains field values)."""


def _coerce_fields(fields: Any) -> List[FieldInput]:
    if not isinstance(fields, (list, tuple)):
        raise TypeError("Fields must be a list")
    coerced: List[FieldInput] = []
    for item in fields:
        if isinstance(item, FieldInput):
            coerced.append(item)
        elif isinstance(item, Mapping):
            coerced.append(FieldInput.from_dict(item))
        else:
            raise TypeError(
                f"Fields must contain FieldInput or mappings, got {type(item).__name__}"
            )
    return coerced


class Scanner:
    """Threat scanner over lists of named field values."""

    def __init__(self, config: Optional[ScannerConfig] = None, **options: Any) -> None:
        if config is not None and options:
            raise TypeError("Pass either a ScannerConfig or keyword options, not both")
        self.config = config if config is not None else ScannerConfig(**options)
        self.registry = PatternRegistry(self.config.custom_patterns)

    # ---- public API ----

    def scan_all(self, fields: Sequence[FieldInput]) -> ScanResult:
        """Scan every field against all five categories."""
        return self._run(fields, ALL_CATEGORIES, "all")

    def scan(self, fields: Sequence[FieldInput], category: Category | str) -> ScanResult:
        """Scan every field against a single category."""
        cat = parse_category(category)
        return self._run(fields, (cat,), cat.value)

    def scan_multiple(
        self,
        fields: Sequence[FieldInput],
        categories: Sequence[Category | str],
    ) -> ScanResult:
        """Scan every field against an explicit, non-empty list of categories."""
        if not isinstance(categories, (list, tuple)):
            raise TypeError("categories must be a list of scanner types")
        if not categories:
            raise ConfigError("categories must be a non-empty list of valid scanner types")
        cats = tuple(parse_category(c) for c in categories)
        return self._run(fields, cats, "multiple")

    async def scan_async(self, fields: Sequence[FieldInput]) -> ScanResult:
        """Yield to the event loop once, then run :meth:`scan_all`."""
        await asyncio.sleep(0)
        return self.scan_all(fields)

    def scan_field(self, field: FieldInput, *categories: Category | str) -> FieldScan:
        """Scan one field against *categories* (all of them when none are given).

        The hidden-character check runs once per field, before any category.
        """
        cats = tuple(parse_category(c) for c in categories) or ALL_CATEGORIES
        return self._scan_field(field, cats)

    # ---- internals ----

    def _run(
        self,
        fields: Sequence[FieldInput],
        categories: Tuple[Category, ...],
        label: str,
    ) -> ScanResult:
        start = time.perf_counter()
        inputs = _coerce_fields(fields)
        stop = self.config.stop_on_first_threat
        include = self.config.include_value_in_response

        results: List[FieldResult] = []
        try:
            for field in inputs:
                scanned = self._scan_field(field, categories)
                results.append(
                    FieldResult(
                        name=field.name,
                        security_score=field_score(scanned.threats),
                        passed=not scanned.threats,
                        threats=scanned.threats,
                        scanned=scanned.scanned,
                        value=field.value if include else None,
                        include_value=include,
                    )
                )
                if stop and scanned.threats:
                    break
        except Exception:
            # Keep field values out of the traceback.
            scanned_count = len(results)
            results.clear()
            raise ScanError(
                f"Internal scanner error after {scanned_count} fields. "
                "Values have been scrubbed from this error."
            ) from None

        elapsed = (time.perf_counter() - start) * 1000
        result = ScanResult(
            security_score=overall_score(results),
            scanner_label=label,
            passed=all_clear(results),
            duration_ms=round(elapsed, 2),
            fields=results,
        )
        logger.debug(
            "Scan %s: %d/%d fields, %d threats, %.2fms",
            label,
            len(results),
            len(inputs),
            result.total_threats,
            result.duration_ms,
        )
        return result

    def _scan_field(self, field: FieldInput, categories: Tuple[Category, ...]) -> FieldScan:
        value = field.value if isinstance(field.value, str) else ""
        if not value:
            return FieldScan()

        normalized = normalize(value)
        scan = FieldScan(scanned=True)
        stop = self.config.stop_on_first_threat

        if contains_hidden_chars(value, normalized):
            scan.threats.append(self._hidden_char_threat(value))
            if stop:
                return scan

        for category in categories:
            found = self._match_category(field, category, normalized)
            scan.threats.extend(found)
            if stop and found:
                break
        return scan

    def _match_category(
        self,
        field: FieldInput,
        category: Category,
        normalized: str,
    ) -> List[Threat]:
        allowlist = HtmlAllowlist.for_field(field, category)
        strict = self.config.strict_mode
        stop = self.config.stop_on_first_threat
        threats: List[Threat] = []

        for pattern in self.registry.patterns_for(category):
            severity = elevate(pattern.severity, strict)
            for m in pattern.finditer(normalized):
                matched = m.group(0)
                if allowlist.is_suppressed(pattern.subtype, matched):
                    continue
                threats.append(
                    Threat(
                        subtype=pattern.subtype,
                        severity=severity,
                        pattern_source=pattern.source,
                        matched_text=matched,
                        offset=m.start(),
                        recommendation=recommendation_for(category, pattern.subtype),
                        category=category.value,
                    )
                )
                if stop:
                    return threats
        return threats

    def _hidden_char_threat(self, original: str) -> Threat:
        return Threat(
            subtype=HIDDEN_CHAR_SUBTYPE,
            severity=elevate("MEDIUM", self.config.strict_mode),
            pattern_source=HIDDEN_CHAR_SOURCE,
            matched_text=original,
            offset=0,
            recommendation=HIDDEN_CHAR_RECOMMENDATION,
        )
