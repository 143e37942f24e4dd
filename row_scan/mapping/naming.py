"""Field name → column name resolution.

Default convention is snake_case:

    UserName   -> user_name
    UserID     -> user_id       (trailing acronym stays one token)
    HTTPServer -> http_server   (acronym splits before the next word)
    user_id    -> user_id
"""

from __future__ import annotations

import re
from functools import lru_cache

# A capitalised word with at least one character before it
_WORD_BOUNDARY = re.compile(r"(.)([A-Z][a-z]+)")

# lower/digit immediately followed by an uppercase letter
_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")


@lru_cache(maxsize=1024)
def to_column_name(declared_name: str) -> str:
    """Convert a camelCase/PascalCase name to snake_case."""
    name = _WORD_BOUNDARY.sub(r"\1_\2", declared_name)
    name = _CASE_BOUNDARY.sub(r"\1_\2", name)
    return name.lower()


def resolve(declared_name: str, override: str | None = None) -> str:
    """Resolve the column name for a field.

    An explicit override is returned verbatim.
    """
    if override is not None:
        return override
    return to_column_name(declared_name)
