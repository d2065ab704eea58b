"""Pattern registry — built-in patterns merged with custom ones, frozen at build time."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

import yaml

from inputguard.config.loader import ConfigError
from inputguard.config.schema import (
    ALL_CATEGORIES,
    SEVERITY_ORDER,
    Category,
    InvalidCategoryError,
    parse_category,
)
from inputguard.rules.builtin import BUILTIN_PATTERNS
from inputguard.rules.models import Pattern

logger = logging.getLogger(__name__)


class PatternRegistry:
    """Per-category ordered pattern lists: built-ins first, then custom patterns.

    The registry is read-only once constructed.
    """

    def __init__(
        self,
        custom_patterns: Optional[Mapping[Category, Sequence[Pattern]]] = None,
    ) -> None:
        custom = custom_patterns or {}
        table: Dict[Category, Tuple[Pattern, ...]] = {}
        for category in ALL_CATEGORIES:
            table[category] = tuple(BUILTIN_PATTERNS[category]) + tuple(
                custom.get(category, ())
            )
        self._patterns: Mapping[Category, Tuple[Pattern, ...]] = MappingProxyType(table)
        logger.debug(
            "Pattern registry built: %d patterns (%d custom)",
            len(self),
            sum(len(v) for v in custom.values()),
        )

    def patterns_for(self, category: Category) -> Tuple[Pattern, ...]:
        return self._patterns[category]

    @property
    def categories(self) -> Tuple[Category, ...]:
        return tuple(self._patterns)

    def items(self) -> Iterator[Tuple[Category, Pattern]]:
        """Yield (category, pattern) in evaluation order."""
        for category, patterns in self._patterns.items():
            for p in patterns:
                yield category, p

    def __len__(self) -> int:
        return sum(len(v) for v in self._patterns.values())


# ---- custom pattern files ----

_REQUIRED_KEYS = ("category", "pattern", "subtype")
_KNOWN_KEYS = frozenset({"category", "pattern", "subtype", "severity", "ignore_case"})


def _pattern_from_entry(entry: Any, where: str) -> Tuple[Category, Pattern]:
    """Validate one YAML entry and turn it into a (category, Pattern) pair."""
    if not isinstance(entry, dict):
        raise ConfigError(f"{where}: expected a mapping, got {type(entry).__name__}")

    unknown = sorted(set(entry) - _KNOWN_KEYS)
    if unknown:
        raise ConfigError(f"{where}: unknown keys {', '.join(unknown)}")
    for key in _REQUIRED_KEYS:
        if not entry.get(key):
            raise ConfigError(f"{where}: missing '{key}'")

    try:
        category = parse_category(entry["category"])
    except InvalidCategoryError as exc:
        raise ConfigError(f"{where}: {exc}") from exc

    severity = str(entry.get("severity", "MEDIUM")).upper()
    if severity not in SEVERITY_ORDER:
        raise ConfigError(f"{where}: invalid severity {entry.get('severity')!r}")

    ignore_case = entry.get("ignore_case", True)
    if not isinstance(ignore_case, bool):
        raise ConfigError(f"{where}: ignore_case must be true or false")

    try:
        pattern = Pattern(
            pattern=str(entry["pattern"]),
            subtype=str(entry["subtype"]),
            severity=severity,  # type: ignore[arg-type]
            flags=re.IGNORECASE if ignore_case else 0,
        )
    except re.error as exc:
        raise ConfigError(f"{where}: pattern does not compile: {exc}") from exc
    return category, pattern


def load_pattern_file(path: Path) -> Dict[Category, List[Pattern]]:
    """Load one YAML file of custom patterns."""
    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"Failed to read {path}: {exc}") from exc

    if data is None:
        return {}
    if not isinstance(data, list):
        data = [data]

    loaded: Dict[Category, List[Pattern]] = {}
    for index, entry in enumerate(data):
        category, pattern = _pattern_from_entry(entry, f"{path.name}[{index}]")
        loaded.setdefault(category, []).append(pattern)
    return loaded


def load_pattern_files(directory: Path) -> Dict[Category, List[Pattern]]:
    """Load every .yaml / .yml file in *directory*, in name order."""
    merged: Dict[Category, List[Pattern]] = {}
    if not directory.is_dir():
        return merged
    for path in sorted(directory.iterdir()):
        if path.suffix in (".yaml", ".yml"):
            for category, patterns in load_pattern_file(path).items():
                merged.setdefault(category, []).extend(patterns)
    logger.debug(
        "Loaded %d custom patterns from %s",
        sum(len(v) for v in merged.values()),
        directory,
    )
    return merged
