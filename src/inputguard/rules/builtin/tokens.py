"""Credential and token leakage patterns — JWT, AWS, GitHub, Stripe, keys, DSNs."""

import re

from inputguard.rules.models import Pattern

JWT_TOKEN = Pattern(
    pattern=r"eyJ[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}\.[A-Za-z0-9_-]{10,}",
    subtype="JWT_TOKEN",
    severity="HIGH",
)

AWS_ACCESS_KEY = Pattern(
    pattern=r"AKIA[0-9A-Z]{16}",
    subtype="AWS_ACCESS_KEY",
    severity="HIGH",
)

AWS_SECRET_KEY = Pattern(
    pattern=r"aws_secret_access_key\s*=\s*[A-Za-z0-9/+=]{40}",
    subtype="AWS_SECRET_KEY",
    severity="HIGH",
    flags=re.IGNORECASE,
)

GITHUB_PAT = Pattern(
    pattern=r"ghp_[A-Za-z0-9]{36}",
    subtype="GITHUB_PAT",
    severity="HIGH",
)

GITHUB_OAUTH = Pattern(
    pattern=r"gho_[A-Za-z0-9]{36}",
    subtype="GITHUB_OAUTH",
    severity="HIGH",
)

STRIPE_SECRET = Pattern(
    pattern=r"sk_live_[0-9a-zA-Z]{24,}",
    subtype="STRIPE_SECRET",
    severity="HIGH",
)

# Publishable keys are semi-public.
STRIPE_PUBLIC = Pattern(
    pattern=r"pk_live_[0-9a-zA-Z]{24,}",
    subtype="STRIPE_PUBLIC",
    severity="MEDIUM",
)

API_KEY = Pattern(
    pattern=r"api[_-]?key[_-]?[=:]\s*['\"]?[A-Za-z0-9_\-]{20,}['\"]?",
    subtype="API_KEY",
    severity="HIGH",
    flags=re.IGNORECASE,
)

PRIVATE_KEY = Pattern(
    pattern=r"-----BEGIN (RSA |EC |DSA )?PRIVATE KEY-----",
    subtype="PRIVATE_KEY",
    severity="HIGH",
)

DB_CONNECTION = Pattern(
    pattern=r"(mongodb|mysql|postgresql)://[^\s]+",
    subtype="DB_CONNECTION",
    severity="HIGH",
    flags=re.IGNORECASE,
)

ALL_TOKEN_PATTERNS = [
    JWT_TOKEN,
    AWS_ACCESS_KEY,
    AWS_SECRET_KEY,
    GITHUB_PAT,
    GITHUB_OAUTH,
    STRIPE_SECRET,
    STRIPE_PUBLIC,
    API_KEY,
    PRIVATE_KEY,
    DB_CONNECTION,
]
