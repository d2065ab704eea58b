"""inputguard — normalize untrusted input and scan it for injection and leaked secrets."""

__version__ = "0.1.0"

from inputguard.config.schema import Category, ScannerConfig
from inputguard.findings.models import FieldInput, FieldResult, ScanResult, Threat
from inputguard.rules.models import Pattern
from inputguard.scanner.engine import Scanner

__all__ = [
    "Category",
    "FieldInput",
    "FieldResult",
    "Pattern",
    "ScanResult",
    "Scanner",
    "ScannerConfig",
    "Threat",
    "__version__",
]
