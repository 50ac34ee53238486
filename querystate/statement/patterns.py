"""Regex helpers for inspecting and rewriting statement text."""
from __future__ import annotations

import re

#: Leading keywords that mark a data or schema mutation.
WRITE_VERBS: tuple[str, ...] = (
    "SET",
    "INSERT",
    "UPDATE",
    "DELETE",
    "REPLACE",
    "CREATE",
    "DROP",
    "TRUNCATE",
    "LOAD",
    "COPY",
    "ALTER",
    "RENAME",
    "GRANT",
    "REVOKE",
    "LOCK",
    "UNLOCK",
    "REINDEX",
)

# Leading whitespace and one optional double quote are tolerated.
_WRITE_STATEMENT_RE = re.compile(
    r'^\s*"?(?:' + "|".join(WRITE_VERBS) + r")\s",
    re.IGNORECASE,
)


def is_write_statement(sql: str | None) -> bool:
    """Return ``True`` if ``sql`` starts with a write verb followed by whitespace."""
    if not sql:
        return False
    return _WRITE_STATEMENT_RE.match(sql) is not None


def swap_prefix(sql: str, search: str, replace: str) -> str:
    """Replace the table prefix ``search`` with ``replace`` throughout ``sql``.

    Only occurrences that start a token are rewritten: ``search`` must be at
    the start of the string or preceded by a non-word character, and must be
    followed by at least one non-whitespace character (the rest of the table
    name).  ``search`` is matched literally.

    Example::

        >>> swap_prefix("SELECT * FROM tbl_users", "tbl_", "app_")
        'SELECT * FROM app_users'
        >>> swap_prefix("SELECT * FROM subtbl_users", "tbl_", "app_")
        'SELECT * FROM subtbl_users'
    """
    if not search:
        return sql
    pattern = re.compile(r"(?<!\w)" + re.escape(search) + r"(?=\S)")
    return pattern.sub(lambda _match: replace, sql)
