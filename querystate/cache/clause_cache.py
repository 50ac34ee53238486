"""Per-builder clause cache.

A query builder writes clause fragments into a :class:`ClauseCache` one call
at a time; a dialect compiler later reads them back to render the statement.
The set of clause keys is fixed when the cache is created.  Only their values
change.

Reset granularity
-----------------
``reset_all()``
    Before a new SELECT-style query: every slot returns to its zero value.

``reset_modifiers()``
    Before an INSERT / UPDATE / DELETE: only the modifier slots (``from``,
    ``join``, the ``where`` family, ``having``, the ``between`` family) are
    cleared.  ``select``, ``limit``, ``offset``, ``groupBy`` and ``orderBy``
    are kept.

Example::

    cache = ClauseCache()
    cache.store("select", ["id", "name"]).store("from", "users").store("limit", 10)
    cache.store("where", {"field": "active", "value": True})
    compiled_sql = compiler.render(cache)
    cache.set_final_statement(compiled_sql)
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from typing import Any

from querystate.cache.slots import ClauseSlot, copy_value, default_slots
from querystate.config import DEFAULT_CONFIG, QueryStateConfig
from querystate.errors import UnknownClauseError

logger = logging.getLogger(__name__)


class ClauseCache:
    """Mutable bag of named query-fragment slots.

    Args:
        config: Behaviour switches; defaults to :data:`DEFAULT_CONFIG`.
        slots: Clause layout mapping each key to its :class:`ClauseSlot`.
            Defaults to :func:`~querystate.cache.slots.default_slots`.
    """

    def __init__(
        self,
        config: QueryStateConfig | None = None,
        slots: Mapping[str, ClauseSlot] | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._slots: dict[str, ClauseSlot] = dict(slots) if slots is not None else default_slots()
        self._storage: dict[str, Any] = {key: slot.zero() for key, slot in self._slots.items()}
        self._final_statement: str | None = None

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any:
        """Return a copy of the value stored under ``key``.

        Mutating the returned value does not change the cache; use
        :meth:`store` or :meth:`update` instead.

        Raises:
            UnknownClauseError: If ``key`` is not part of the layout.
        """
        self._slot(key)
        return copy_value(self._storage[key])

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._slots

    def __iter__(self) -> Iterator[str]:
        return iter(self._slots)

    def keys(self) -> list[str]:
        """Return the clause names in declaration order."""
        return list(self._slots)

    def modifier_keys(self) -> list[str]:
        """Return the clause names cleared by :meth:`reset_modifiers`."""
        return [key for key, slot in self._slots.items() if slot.modifier]

    def as_dict(self) -> dict[str, Any]:
        """Return a copy of every slot, keyed by clause name."""
        return {key: copy_value(value) for key, value in self._storage.items()}

    # ------------------------------------------------------------------
    # Writing
    # ------------------------------------------------------------------

    def store(self, key: str, value: Any) -> ClauseCache:
        """Merge ``value`` into the slot for ``key``.

        List slots concatenate sequences and append scalars; flag slots coerce
        to ``bool``; every other slot is replaced.

        Args:
            key: Clause name.
            value: Fragment (or fragments) to store.

        Returns:
            This cache, for chaining.

        Raises:
            UnknownClauseError: If ``key`` is unknown and the cache is strict.
            InvalidClauseValueError: If the slot rejects ``value``.
        """
        slot = self._slots.get(key)
        if slot is None:
            if self._config.strict_clauses:
                raise UnknownClauseError(key, self.keys())
            logger.warning("Ignoring value for unknown clause %r", key)
            return self
        self._storage[key] = slot.merge(key, self._storage[key], value)
        return self

    def update(self, key: str, transform: Callable[[Any], Any]) -> ClauseCache:
        """Replace the slot for ``key`` with ``transform(current_copy)``.

        Unlike :meth:`store`, the result replaces the slot instead of being
        merged into it.

        Raises:
            UnknownClauseError: If ``key`` is not part of the layout.
            InvalidClauseValueError: If the slot rejects the new value.
        """
        slot = self._slot(key)
        self._storage[key] = slot.accept(key, transform(copy_value(self._storage[key])))
        return self

    def set_final_statement(self, statement: str) -> ClauseCache:
        """Store the compiled statement text, stripped of surrounding whitespace."""
        self._final_statement = statement.strip()
        return self

    def get_final_statement(self) -> str | None:
        return self._final_statement

    def reset_final_statement(self) -> ClauseCache:
        self._final_statement = None
        return self

    # ------------------------------------------------------------------
    # Resetting
    # ------------------------------------------------------------------

    def reset_all(self) -> ClauseCache:
        """Restore every slot to its zero value.

        The final statement is kept; clear it with
        :meth:`reset_final_statement`.
        """
        self._reset(self.keys())
        return self

    def reset_modifiers(self) -> ClauseCache:
        """Restore only the modifier slots to their zero values."""
        self._reset(self.modifier_keys())
        return self

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _reset(self, keys: list[str]) -> None:
        for key in keys:
            self._storage[key] = self._slots[key].zero()
        logger.debug("Reset clauses %s", keys)

    def _slot(self, key: str) -> ClauseSlot:
        slot = self._slots.get(key)
        if slot is None:
            raise UnknownClauseError(key, self.keys())
        return slot

    def __repr__(self) -> str:
        filled = [key for key, value in self._storage.items() if value != self._slots[key].zero()]
        return f"ClauseCache(filled={filled})"
