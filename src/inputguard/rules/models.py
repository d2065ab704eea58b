"""Pattern data model — compiled once, matched statelessly."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, Union

from inputguard.config.schema import Severity


@dataclass(frozen=True)
class Pattern:
    """A single detection pattern.

    ``pattern`` may be a raw string or an already compiled regex. Strings are
    compiled at construction with ``flags``; compiled regexes keep their own
    flags. Matching goes through :meth:`finditer`, which carries no state
    between calls, so one Pattern is safe to share between concurrent scans.
    """

    pattern: Union[str, "re.Pattern[str]"]
    subtype: str
    severity: Severity
    flags: int = 0

    _compiled: "re.Pattern[str]" = field(
        default=None, init=False, repr=False, compare=False  # type: ignore[assignment]
    )

    def __post_init__(self) -> None:
        if isinstance(self.pattern, re.Pattern):
            compiled = self.pattern
        else:
            compiled = re.compile(self.pattern, self.flags)
        object.__setattr__(self, "_compiled", compiled)

    @property
    def compiled(self) -> "re.Pattern[str]":
        return self._compiled

    @property
    def source(self) -> str:
        return self._compiled.pattern

    def finditer(self, text: str) -> Iterator["re.Match[str]"]:
        """Yield all non-overlapping matches in *text*."""
        return self._compiled.finditer(text)
