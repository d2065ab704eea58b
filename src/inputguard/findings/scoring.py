"""Security scoring and run-level aggregation."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from inputguard.findings.models import FieldResult, Threat

SEVERITY_PENALTY: Dict[str, float] = {
    "HIGH": 0.4,
    "MEDIUM": 0.2,
    "LOW": 0.1,
}
DEFAULT_PENALTY = 0.1


def field_score(threats: Sequence[Threat]) -> float:
    """1.0 minus the summed severity penalties, floored at 0.0."""
    if not threats:
        return 1.0
    penalty = sum(SEVERITY_PENALTY.get(t.severity, DEFAULT_PENALTY) for t in threats)
    return max(0.0, 1.0 - penalty)


def round_score(score: float) -> float:
    """Round half-up to two decimals."""
    return float(Decimal(str(score)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def overall_score(results: List[FieldResult]) -> float:
    """Mean field score weighted by the fraction of fields that passed.

    An empty run scores 0.0.
    """
    if not results:
        return 0.0
    passed = sum(1 for r in results if r.passed)
    mean = sum(r.security_score for r in results) / len(results)
    return round_score(mean * (passed / len(results)))


def all_clear(results: List[FieldResult]) -> bool:
    """True iff no field carries any threat."""
    return not any(r.threats for r in results)
