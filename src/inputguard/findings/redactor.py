"""Redaction of leaked credentials for safe output."""

from __future__ import annotations

from typing import Optional

from inputguard.config.schema import Category

REDACTED = "[REDACTED]"


def redact_partial(value: str) -> str:
    """Partial reveal: first 4 + last 2 chars.

    Example: ``ghp_Abc123xyz9`` → ``ghp_...z9``
    """
    if len(value) <= 6:
        return REDACTED
    return f"{value[:4]}...{value[-2:]}"


def redact(value: str, *, full: bool = False) -> str:
    """Redact a matched secret value."""
    if full:
        return REDACTED
    return redact_partial(value)


def display_match(matched_text: str, category: Optional[str], *, redact_tokens: bool) -> str:
    """Matched text as it may be shown in a report."""
    if redact_tokens and category == Category.TOKEN_LEAKAGE.value:
        return redact(matched_text)
    return matched_text
