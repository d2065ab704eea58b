"""SQL injection patterns — unions, tautologies, comments, stacked and timed queries."""

import re

from inputguard.rules.models import Pattern

UNION_SELECT = Pattern(
    pattern=r"(\bUNION\b.*\bSELECT\b)",
    subtype="UNION_SELECT",
    severity="HIGH",
    flags=re.IGNORECASE,
)

OR_CONDITION = Pattern(
    pattern=r"(\bOR\b\s+['\"]*\d+['\"]*\s*=\s*['\"]*\d+)",
    subtype="OR_CONDITION",
    severity="HIGH",
    flags=re.IGNORECASE,
)

AND_CONDITION = Pattern(
    pattern=r"(\bAND\b\s+['\"]*\d+['\"]*\s*=\s*['\"]*\d+)",
    subtype="AND_CONDITION",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

SQL_COMMENT = Pattern(
    pattern=r"(--|#|/\*|\*/)",
    subtype="SQL_COMMENT",
    severity="MEDIUM",
)

STACKED_QUERY = Pattern(
    pattern=r";\s*(DROP|DELETE|UPDATE|INSERT|ALTER|CREATE)\b",
    subtype="STACKED_QUERY",
    severity="HIGH",
    flags=re.IGNORECASE,
)

TIME_BASED = Pattern(
    pattern=r"\b(SLEEP|BENCHMARK|WAITFOR\s+DELAY)\b",
    subtype="TIME_BASED",
    severity="HIGH",
    flags=re.IGNORECASE,
)

QUOTE_ESCAPE = Pattern(
    pattern=r"\\['\"`]",
    subtype="QUOTE_ESCAPE",
    severity="MEDIUM",
)

HEX_ENCODING = Pattern(
    pattern=r"0x[0-9a-f]+",
    subtype="HEX_ENCODING",
    severity="LOW",
    flags=re.IGNORECASE,
)

# admin' OR 'x ...
KEYWORD_INJECTION = Pattern(
    pattern=r"'\s*(OR|AND)\s+'?[a-z0-9]",
    subtype="KEYWORD_INJECTION",
    severity="HIGH",
    flags=re.IGNORECASE,
)

SCHEMA_ACCESS = Pattern(
    pattern=r"\b(information_schema|sysobjects|syscolumns)\b",
    subtype="SCHEMA_ACCESS",
    severity="HIGH",
    flags=re.IGNORECASE,
)

ALL_SQL_PATTERNS = [
    UNION_SELECT,
    OR_CONDITION,
    AND_CONDITION,
    SQL_COMMENT,
    STACKED_QUERY,
    TIME_BASED,
    QUOTE_ESCAPE,
    HEX_ENCODING,
    KEYWORD_INJECTION,
    SCHEMA_ACCESS,
]
