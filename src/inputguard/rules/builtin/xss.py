"""Cross-site scripting patterns.

The subtypes listed in ``UNSUPPRESSIBLE_SUBTYPES`` always fire, even for
HTML fields whose allowlist names the tag involved.
"""

import re

from inputguard.rules.models import Pattern

# <script>...</script> with whitespace allowed between every letter.
# A single \s* per gap: nested quantifiers here backtrack badly.
SCRIPT_TAG = Pattern(
    pattern=(
        r"<\s*s\s*c\s*r\s*i\s*p\s*t[^>]*>[\s\S]*?"
        r"<\s*/\s*s\s*c\s*r\s*i\s*p\s*t\s*>"
    ),
    subtype="SCRIPT_TAG",
    severity="HIGH",
    flags=re.IGNORECASE,
)

SCRIPT_TAG_OPEN = Pattern(
    pattern=r"<\s*script\b[^>]*>",
    subtype="SCRIPT_TAG_OPEN",
    severity="HIGH",
    flags=re.IGNORECASE,
)

# <scr<script>ipt>
NESTED_SCRIPT_TAG = Pattern(
    pattern=r"s\s*c\s*r\s*<\s*script[^>]*>\s*i\s*p\s*t",
    subtype="NESTED_SCRIPT_TAG",
    severity="HIGH",
    flags=re.IGNORECASE,
)

JS_PROTOCOL = Pattern(
    pattern=r"j\s*a\s*v\s*a\s*s\s*c\s*r\s*i\s*p\s*t\s*:",
    subtype="JS_PROTOCOL",
    severity="HIGH",
    flags=re.IGNORECASE,
)

EVENT_HANDLER = Pattern(
    pattern=r"""\bon\w+\s*=\s*(".*?"|'.*?'|[^\s>]+)""",
    subtype="EVENT_HANDLER",
    severity="HIGH",
    flags=re.IGNORECASE,
)

DATA_URI_SCRIPT = Pattern(
    pattern=r"data\s*:\s*text/html[^,]*,[\s\S]*?<\s*script",
    subtype="DATA_URI_SCRIPT",
    severity="HIGH",
    flags=re.IGNORECASE,
)

DANGEROUS_TAG = Pattern(
    pattern=r"<(iframe|embed|object|applet|meta|link|style)\b[^>]*>",
    subtype="DANGEROUS_TAG",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

SVG_SCRIPT = Pattern(
    pattern=r"<svg[^>]*>[\s\S]*?<script",
    subtype="SVG_SCRIPT",
    severity="HIGH",
    flags=re.IGNORECASE,
)

# Survives normalization only when double-encoded.
ENCODED_TAG = Pattern(
    pattern=r"(%3C|&lt;)\s*script",
    subtype="ENCODED_TAG",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

INLINE_JS = Pattern(
    pattern=r"\b(alert|confirm|prompt|eval|setTimeout|setInterval)\s*\(",
    subtype="INLINE_JS",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

VBSCRIPT_PROTOCOL = Pattern(
    pattern=r"vbscript\s*:",
    subtype="VBSCRIPT_PROTOCOL",
    severity="HIGH",
    flags=re.IGNORECASE,
)

ALL_XSS_PATTERNS = [
    SCRIPT_TAG,
    SCRIPT_TAG_OPEN,
    NESTED_SCRIPT_TAG,
    JS_PROTOCOL,
    EVENT_HANDLER,
    DATA_URI_SCRIPT,
    DANGEROUS_TAG,
    SVG_SCRIPT,
    ENCODED_TAG,
    INLINE_JS,
    VBSCRIPT_PROTOCOL,
]

UNSUPPRESSIBLE_SUBTYPES = frozenset({
    "SCRIPT_TAG",
    "SCRIPT_TAG_OPEN",
    "EVENT_HANDLER",
    "JS_PROTOCOL",
    "DATA_URI_SCRIPT",
    "SVG_SCRIPT",
})

SUPPRESSIBLE_SUBTYPES = frozenset({"DANGEROUS_TAG"})
