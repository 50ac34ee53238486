"""Clause slot strategies (Strategy pattern).

Every clause key in a :class:`~querystate.cache.clause_cache.ClauseCache` is
declared up front with a :class:`ClauseSlot`.  The slot owns three things:

* the key's zero value (restored on reset),
* the merge rule applied by ``ClauseCache.store``,
* whether the key belongs to the *modifier* subset cleared before
  INSERT / UPDATE / DELETE style operations.

Merge behaviour is therefore fixed per key at construction time instead of
being inferred from whatever value happens to be stored.

Slot kinds
----------
ListSlot      - ordered fragments; sequences are concatenated, scalars appended
NullableSlot  - single value or ``None``; replaced outright
IntegerSlot   - integer such as LIMIT / OFFSET; replaced outright unless strict
FlagSlot      - boolean; the stored value is coerced with ``bool()``
"""
from __future__ import annotations

import copy
import operator
from abc import ABC, abstractmethod
from typing import Any

from querystate.errors import InvalidClauseValueError


class ClauseSlot(ABC):
    """Declares the zero value and merge rule of one clause key.

    Args:
        modifier: ``True`` if the key is cleared by
            :meth:`~querystate.cache.clause_cache.ClauseCache.reset_modifiers`.
    """

    def __init__(self, modifier: bool = False) -> None:
        self.modifier = modifier

    @abstractmethod
    def zero(self) -> Any:
        """Return a fresh zero value for this slot."""

    @abstractmethod
    def merge(self, key: str, current: Any, value: Any) -> Any:
        """Return the new slot value after ``store(key, value)``.

        Args:
            key: Clause name (used in error messages).
            current: The value currently held by the cache.
            value: The value passed to ``store``.

        Raises:
            InvalidClauseValueError: If the slot cannot accept ``value``.
        """

    def accept(self, key: str, value: Any) -> Any:
        """Validate a wholesale replacement value (used by ``update``).

        Args:
            key: Clause name (used in error messages).
            value: The replacement value.

        Returns:
            The value to store.
        """
        return value

    def __repr__(self) -> str:
        return f"{type(self).__name__}(modifier={self.modifier})"


class ListSlot(ClauseSlot):
    """Ordered list of fragments.

    A ``list`` or ``tuple`` is concatenated onto the current list, preserving
    order and duplicates.  Any other value (strings and dicts included) is
    appended as a single fragment.
    """

    def zero(self) -> list[Any]:
        return []

    def merge(self, key: str, current: Any, value: Any) -> list[Any]:
        if isinstance(value, (list, tuple)):
            return [*current, *value]
        return [*current, value]

    def accept(self, key: str, value: Any) -> list[Any]:
        if not isinstance(value, (list, tuple)):
            raise InvalidClauseValueError(key, value, "expected a list of fragments")
        return list(value)


class NullableSlot(ClauseSlot):
    """A single value that may be ``None``; every store replaces it."""

    def zero(self) -> None:
        return None

    def merge(self, key: str, current: Any, value: Any) -> Any:
        return value


class IntegerSlot(ClauseSlot):
    """An integer such as LIMIT or OFFSET, zero by default.

    Stored values replace the current one as given.  A strict slot instead
    requires a non-negative integer and raises
    :class:`~querystate.errors.InvalidClauseValueError` otherwise.

    Args:
        modifier: See :class:`ClauseSlot`.
        strict: Validate stored values.
    """

    def __init__(self, modifier: bool = False, strict: bool = False) -> None:
        super().__init__(modifier)
        self.strict = strict

    def zero(self) -> int:
        return 0

    def merge(self, key: str, current: Any, value: Any) -> Any:
        return self.accept(key, value)

    def accept(self, key: str, value: Any) -> Any:
        if not self.strict:
            return value
        if isinstance(value, bool):
            raise InvalidClauseValueError(key, value, "expected an integer, got a bool")
        try:
            number = operator.index(value)
        except TypeError as exc:
            raise InvalidClauseValueError(key, value, "expected an integer") from exc
        if number < 0:
            raise InvalidClauseValueError(key, value, "must not be negative")
        return number


class FlagSlot(ClauseSlot):
    """A boolean switch; stored values are coerced with ``bool()``."""

    def zero(self) -> bool:
        return False

    def merge(self, key: str, current: Any, value: Any) -> bool:
        return bool(value)

    def accept(self, key: str, value: Any) -> bool:
        return bool(value)


def copy_value(value: Any) -> Any:
    """Return an independent copy of a slot value."""
    return copy.deepcopy(value)


# ---------------------------------------------------------------------------
# Default layout
# ---------------------------------------------------------------------------


def default_slots() -> dict[str, ClauseSlot]:
    """Return the standard clause layout, in declaration order."""
    return {
        "select": ListSlot(),
        "from": NullableSlot(modifier=True),
        "join": ListSlot(modifier=True),
        "where": ListSlot(modifier=True),
        "orWhere": ListSlot(modifier=True),
        "whereIn": ListSlot(modifier=True),
        "orWhereIn": ListSlot(modifier=True),
        "whereNotIn": ListSlot(modifier=True),
        "having": ListSlot(modifier=True),
        "between": ListSlot(modifier=True),
        "notBetween": ListSlot(modifier=True),
        "limit": IntegerSlot(),
        "offset": IntegerSlot(),
        "groupBy": ListSlot(),
        "orderBy": ListSlot(),
    }
