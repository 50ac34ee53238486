"""querystate statement layer: records of compiled and executed statements."""
from querystate.statement.patterns import WRITE_VERBS, is_write_statement, swap_prefix
from querystate.statement.record import StatementError, StatementRecord, StatementSnapshot

__all__ = [
    "StatementError",
    "StatementRecord",
    "StatementSnapshot",
    "WRITE_VERBS",
    "is_write_statement",
    "swap_prefix",
]
