"""HTML allowlist suppression for the XSS category.

A field declared as ``html`` may list tags it is allowed to contain. The
allowlist only ever applies to ``DANGEROUS_TAG`` matches: a match is dropped
when the tag it names is listed. Script tags, event handlers, ``javascript:``
URLs, ``data:text/html`` scripts and SVG scripts are reported regardless of
what the allowlist says.
"""

from __future__ import annotations

import re
from typing import FrozenSet, Iterable, Optional

from inputguard.config.schema import Category
from inputguard.findings.models import FieldInput
from inputguard.rules.builtin.xss import SUPPRESSIBLE_SUBTYPES, UNSUPPRESSIBLE_SUBTYPES

_TAG_NAME_RE = re.compile(r"<\s*([a-z0-9\-]+)", re.IGNORECASE)


def tag_name(text: str) -> Optional[str]:
    """Lowercased name of the first tag in *text*, if any."""
    m = _TAG_NAME_RE.search(text)
    return m.group(1).lower() if m else None


class HtmlAllowlist:
    """Allowlist for one field; inactive unless the field is HTML with tags listed."""

    def __init__(self, tags: Iterable[str] = ()) -> None:
        self._tags: FrozenSet[str] = frozenset(t.lower() for t in tags)

    @classmethod
    def for_field(cls, field: FieldInput, category: Category) -> "HtmlAllowlist":
        if category is not Category.XSS or not field.is_html or not field.allowed_tags:
            return cls()
        return cls(field.allowed_tags)

    @property
    def active(self) -> bool:
        return bool(self._tags)

    def covers(self, subtype: str) -> bool:
        """True if matches of *subtype* may be suppressed at all."""
        return (
            self.active
            and subtype in SUPPRESSIBLE_SUBTYPES
            and subtype not in UNSUPPRESSIBLE_SUBTYPES
        )

    def is_suppressed(self, subtype: str, matched_text: str) -> bool:
        """True if this match names an allowed tag and its subtype permits that."""
        if not self.covers(subtype):
            return False
        name = tag_name(matched_text)
        return name is not None and name in self._tags
