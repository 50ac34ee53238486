"""querystate clause cache: per-builder storage of query fragments."""
from querystate.cache.clause_cache import ClauseCache
from querystate.cache.slots import (
    ClauseSlot,
    FlagSlot,
    IntegerSlot,
    ListSlot,
    NullableSlot,
    default_slots,
)

__all__ = [
    "ClauseCache",
    "ClauseSlot",
    "FlagSlot",
    "IntegerSlot",
    "ListSlot",
    "NullableSlot",
    "default_slots",
]
