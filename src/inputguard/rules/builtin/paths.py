"""Path traversal patterns."""

import re

from inputguard.rules.models import Pattern

DIRECTORY_TRAVERSAL = Pattern(
    pattern=r"\.\.[/\\]",
    subtype="DIRECTORY_TRAVERSAL",
    severity="HIGH",
)

ENCODED_TRAVERSAL = Pattern(
    pattern=r"(%2e%2e[/\\]|\.\.%2f|\.\.%5c)",
    subtype="ENCODED_TRAVERSAL",
    severity="HIGH",
    flags=re.IGNORECASE,
)

# Overlong UTF-8 encodings of / and \
UNICODE_TRAVERSAL = Pattern(
    pattern=r"(\.\.%c0%af|\.\.%c1%9c)",
    subtype="UNICODE_TRAVERSAL",
    severity="HIGH",
    flags=re.IGNORECASE,
)

ABSOLUTE_PATH = Pattern(
    pattern=r"(^/etc/|^/var/|^/proc/|^C:\\|^/root/)",
    subtype="ABSOLUTE_PATH",
    severity="HIGH",
    flags=re.IGNORECASE,
)

NULL_BYTE = Pattern(
    pattern=r"%00",
    subtype="NULL_BYTE",
    severity="MEDIUM",
)

WINDOWS_PATH = Pattern(
    pattern=r"[A-Z]:\\|\\\\[^\\]+\\",
    subtype="WINDOWS_PATH",
    severity="MEDIUM",
    flags=re.IGNORECASE,
)

ALL_PATH_PATTERNS = [
    DIRECTORY_TRAVERSAL,
    ENCODED_TRAVERSAL,
    UNICODE_TRAVERSAL,
    ABSOLUTE_PATH,
    NULL_BYTE,
    WINDOWS_PATH,
]
