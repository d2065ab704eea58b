"""Scanner — engine, normalizer, HTML allowlist suppression."""

from inputguard.scanner.engine import ScanError, Scanner
from inputguard.scanner.normalizer import contains_hidden_chars, normalize
from inputguard.scanner.suppression import HtmlAllowlist

__all__ = [
    "HtmlAllowlist",
    "ScanError",
    "Scanner",
    "contains_hidden_chars",
    "normalize",
]
