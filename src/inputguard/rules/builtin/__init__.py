"""Built-in patterns — one table per category."""

from typing import Dict, List

from inputguard.config.schema import Category
from inputguard.rules.builtin.nosql import ALL_NOSQL_PATTERNS
from inputguard.rules.builtin.paths import ALL_PATH_PATTERNS
from inputguard.rules.builtin.sql import ALL_SQL_PATTERNS
from inputguard.rules.builtin.tokens import ALL_TOKEN_PATTERNS
from inputguard.rules.builtin.xss import ALL_XSS_PATTERNS
from inputguard.rules.models import Pattern

BUILTIN_PATTERNS: Dict[Category, List[Pattern]] = {
    Category.SQL_INJECTION: ALL_SQL_PATTERNS,
    Category.NOSQL_INJECTION: ALL_NOSQL_PATTERNS,
    Category.XSS: ALL_XSS_PATTERNS,
    Category.PATH_TRAVERSAL: ALL_PATH_PATTERNS,
    Category.TOKEN_LEAKAGE: ALL_TOKEN_PATTERNS,
}

__all__ = ["BUILTIN_PATTERNS"]
