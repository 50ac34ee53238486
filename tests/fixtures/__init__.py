"""Test fixtures: clause layouts and sample statements."""

from __future__ import annotations

ALL_CLAUSES = [
    "select", "from", "join", "where", "orWhere", "whereIn", "orWhereIn",
    "whereNotIn", "having", "between", "notBetween", "limit", "offset",
    "groupBy", "orderBy",
]

MODIFIER_CLAUSES = [
    "from", "join", "where", "orWhere", "whereIn", "orWhereIn",
    "whereNotIn", "having", "between", "notBetween",
]

#: Instant returned by the fixed clock fixture.
FIXED_NOW = 1_700_000_010.25

PREFIXED_SELECT = "SELECT * FROM tbl_users WHERE tbl_users.id=1"
