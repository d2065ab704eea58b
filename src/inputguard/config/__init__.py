"""Configuration loading, schema, and defaults."""

from inputguard.config.loader import ConfigError, load_config
from inputguard.config.schema import (
    ALL_CATEGORIES,
    Category,
    InputGuardConfig,
    InvalidCategoryError,
    ScannerConfig,
    Severity,
    parse_category,
)

__all__ = [
    "ALL_CATEGORIES",
    "Category",
    "ConfigError",
    "InputGuardConfig",
    "InvalidCategoryError",
    "ScannerConfig",
    "Severity",
    "load_config",
    "parse_category",
]
