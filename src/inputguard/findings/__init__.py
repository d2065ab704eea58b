"""Result models, scoring, and redaction."""

from inputguard.findings.models import FieldInput, FieldResult, ScanResult, Threat
from inputguard.findings.redactor import redact
from inputguard.findings.scoring import field_score, overall_score

__all__ = [
    "FieldInput",
    "FieldResult",
    "ScanResult",
    "Threat",
    "field_score",
    "overall_score",
    "redact",
]
