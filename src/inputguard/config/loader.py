"""Load configuration from .inputguard.toml."""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path
from typing import Any, Dict, Optional

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from inputguard.config.schema import (
    InputGuardConfig,
    InvalidCategoryError,
    OutputSection,
    PatternsSection,
    ScannerSection,
    parse_category,
)

CONFIG_FILENAME = ".inputguard.toml"


class ConfigError(Exception):
    """Raised when config is malformed or unreadable, or a scan is misconfigured."""


def find_config_file(project_root: Path, override: Optional[str] = None) -> Optional[Path]:
    """Locate the config file. *override* takes precedence."""
    if override:
        p = Path(override)
        if not p.is_file():
            raise ConfigError(f"Config file not found: {override}")
        return p
    candidate = project_root / CONFIG_FILENAME
    return candidate if candidate.is_file() else None


def _parse_toml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _build_section(data: Dict[str, Any], cls: type, section: str):
    """Build a dataclass from a TOML section dict, ignoring unknown keys."""
    raw = data.get(section, {})
    if not isinstance(raw, dict):
        raise ConfigError(f"[{section}] must be a table")
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in raw.items() if k in valid_fields}
    return cls(**filtered)


def _validate(cfg: InputGuardConfig) -> None:
    for name in ("strict_mode", "stop_on_first_threat", "include_value_in_response"):
        if not isinstance(getattr(cfg.scanner, name), bool):
            raise ConfigError(f"[scanner] {name} must be true or false")
    if not isinstance(cfg.scanner.categories, list):
        raise ConfigError("[scanner] categories must be a list")
    for category in cfg.scanner.categories:
        try:
            parse_category(category)
        except InvalidCategoryError as exc:
            raise ConfigError(f"[scanner] {exc}") from exc
    if cfg.output.format not in ("terminal", "json"):
        raise ConfigError(f"[output] invalid format: {cfg.output.format}")


def load_config(
    project_root: Path,
    config_override: Optional[str] = None,
) -> InputGuardConfig:
    """Load, validate, and return an InputGuardConfig."""
    config_path = find_config_file(project_root, config_override)

    if config_path is None:
        return InputGuardConfig()

    raw = _parse_toml(config_path)
    cfg = InputGuardConfig(
        version=str(raw.get("version", "1.0")),
        scanner=_build_section(raw, ScannerSection, "scanner"),
        output=_build_section(raw, OutputSection, "output"),
        patterns=_build_section(raw, PatternsSection, "patterns"),
    )
    _validate(cfg)
    return cfg
