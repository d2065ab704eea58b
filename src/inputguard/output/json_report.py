"""JSON reporter for pipelines and batch jobs."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from inputguard.config.schema import Category
from inputguard.findings.models import FieldResult, ScanResult
from inputguard.findings.redactor import display_match, redact


def _field_to_dict(field: FieldResult, *, redact_tokens: bool) -> Dict[str, Any]:
    threats: List[Dict[str, Any]] = []
    for t in field.threats:
        threats.append({
            "type": t.subtype,
            "severity": t.severity,
            **({"category": t.category} if t.category else {}),
            "pattern": t.pattern_source,
            "matched": display_match(t.matched_text, t.category, redact_tokens=redact_tokens),
            "position": t.offset,
            "recommendation": t.recommendation,
        })

    data: Dict[str, Any] = {
        "name": field.name,
        "security_score": round(field.security_score, 2),
        "passed": field.passed,
        "scanned": field.scanned,
        "threats": threats,
    }
    if field.include_value:
        leaked = any(t.category == Category.TOKEN_LEAKAGE.value for t in field.threats)
        value = field.value
        if value and leaked and redact_tokens:
            value = redact(value, full=True)
        data["value"] = value
    return data


def to_dict(result: ScanResult, *, redact_tokens: bool = True) -> Dict[str, Any]:
    """Convert ScanResult to a JSON-serialisable dict."""
    return {
        "version": "1.0",
        "scanner": result.scanner_label,
        "security_score": result.security_score,
        "passed": result.passed,
        "total_threats": result.total_threats,
        "duration_ms": result.duration_ms,
        "result": [_field_to_dict(f, redact_tokens=redact_tokens) for f in result.fields],
    }


def render(result: ScanResult, *, redact_tokens: bool = True) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(result, redact_tokens=redact_tokens), indent=2, ensure_ascii=False)
