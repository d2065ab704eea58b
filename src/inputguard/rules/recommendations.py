"""Remediation text per category and subtype."""

from __future__ import annotations

from typing import Dict, Optional

from inputguard.config.schema import Category

GLOBAL_DEFAULT = "Review and sanitize input"

HIDDEN_CHAR_RECOMMENDATION = "Remove invisible unicode characters or reject input"

_DEFAULT = "default"

RECOMMENDATIONS: Dict[Category, Dict[str, str]] = {
    Category.SQL_INJECTION: {
        "UNION_SELECT": "Use parameterized queries or prepared statements",
        "OR_CONDITION": "Validate input and use parameterized queries",
        "SQL_COMMENT": "Remove SQL comment characters from input",
        "STACKED_QUERY": "Disable multiple statement execution",
        _DEFAULT: "Use parameterized queries and input validation",
    },
    Category.NOSQL_INJECTION: {
        "MONGO_OPERATOR": "Sanitize MongoDB operators from input",
        "OPERATOR_INJECTION": "Use proper query parameterization",
        _DEFAULT: "Validate and sanitize NoSQL query inputs",
    },
    Category.XSS: {
        "SCRIPT_TAG": "Remove script tags or encode HTML entities; sanitize input",
        "EVENT_HANDLER": "Remove inline event handlers or sanitize attributes",
        "JS_PROTOCOL": "Remove javascript: protocol from URLs",
        "DATA_URI_SCRIPT": "Disallow data:text/html URIs or sanitize and decode first",
        "HIDDEN_CHAR_OBFUSCATION": (
            "Reject input containing invisible Unicode characters "
            "or normalize before rendering"
        ),
        _DEFAULT: "Encode HTML entities and sanitize user input",
    },
    Category.PATH_TRAVERSAL: {
        "DIRECTORY_TRAVERSAL": "Use basename() or validate against whitelist",
        "ABSOLUTE_PATH": "Reject absolute paths, use relative paths only",
        _DEFAULT: "Validate file paths against whitelist",
    },
    Category.TOKEN_LEAKAGE: {
        "JWT_TOKEN": "Remove JWT token from input",
        "AWS_ACCESS_KEY": "Remove AWS credentials immediately",
        "API_KEY": "Remove API key from input",
        "PRIVATE_KEY": "Remove private key immediately",
        _DEFAULT: "Remove sensitive credentials from input",
    },
}


def recommendation_for(category: Optional[Category], subtype: str) -> str:
    """Subtype text, else the category default, else a global default."""
    table = RECOMMENDATIONS.get(category, {}) if category is not None else {}
    return table.get(subtype) or table.get(_DEFAULT) or GLOBAL_DEFAULT
