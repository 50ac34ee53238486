"""querystate - query-state accumulation for database access layers.

Collect Fragments. Record Outcomes.

Public API
----------
``ClauseCache``
    Per-builder store of clause fragments (``select``, ``where``, ``limit``,
    ...) with full and modifier-only resets.

``StatementRecord``
    One statement's raw text, bindings, final text, execution timing,
    affected rows, last insert id, and recorded errors.

``QueryStateConfig``
    Behaviour switches shared by both (strict clause names, default
    time-formatting precision).

Extensibility
-------------
A cache layout is a mapping of clause names to slot strategies, so a builder
that needs an extra clause declares it explicitly::

    from querystate import ClauseCache, FlagSlot, default_slots

    cache = ClauseCache(slots={**default_slots(), "distinct": FlagSlot()})
"""

from __future__ import annotations

from querystate.cache.clause_cache import ClauseCache
from querystate.cache.slots import (
    ClauseSlot,
    FlagSlot,
    IntegerSlot,
    ListSlot,
    NullableSlot,
    default_slots,
)
from querystate.clock import Clock, system_clock
from querystate.config import DEFAULT_CONFIG, QueryStateConfig
from querystate.errors import (
    ConfigError,
    DurationNotRecordedError,
    InvalidClauseValueError,
    QueryStateError,
    UnknownClauseError,
)
from querystate.statement.patterns import WRITE_VERBS, is_write_statement, swap_prefix
from querystate.statement.record import (
    StatementError,
    StatementRecord,
    StatementSnapshot,
)

__all__ = [
    # Clause cache
    "ClauseCache",
    "ClauseSlot",
    "ListSlot",
    "NullableSlot",
    "IntegerSlot",
    "FlagSlot",
    "default_slots",
    # Statement records
    "StatementRecord",
    "StatementError",
    "StatementSnapshot",
    "WRITE_VERBS",
    "is_write_statement",
    "swap_prefix",
    # Configuration
    "QueryStateConfig",
    "DEFAULT_CONFIG",
    "Clock",
    "system_clock",
    # Errors
    "QueryStateError",
    "UnknownClauseError",
    "InvalidClauseValueError",
    "DurationNotRecordedError",
    "ConfigError",
]
