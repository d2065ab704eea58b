"""NoSQL (MongoDB) injection patterns."""

import re

from inputguard.rules.models import Pattern

MONGO_OPERATOR = Pattern(
    pattern=r"\$where|\$ne|\$gt|\$lt|\$gte|\$lte|\$in|\$nin|\$regex",
    subtype="MONGO_OPERATOR",
    severity="HIGH",
    flags=re.IGNORECASE,
)

OPERATOR_INJECTION = Pattern(
    pattern=r"\{\s*['\"]\$\w+['\"]\s*:",
    subtype="OPERATOR_INJECTION",
    severity="HIGH",
    flags=re.IGNORECASE,
)

JS_INJECTION = Pattern(
    pattern=r"\bfunction\s*\(|\bthis\.",
    subtype="JS_INJECTION",
    severity="HIGH",
    flags=re.IGNORECASE,
)

ARRAY_INJECTION = Pattern(
    pattern=r"\[\s*\{\s*['\"]\$",
    subtype="ARRAY_INJECTION",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

ALL_NOSQL_PATTERNS = [
    MONGO_OPERATOR,
    OPERATOR_INJECTION,
    JS_INJECTION,
    ARRAY_INJECTION,
]
