"""Custom exception hierarchy for querystate.

All public errors inherit from QueryStateError so callers can catch the base
class for any querystate-specific failure.

Statement *execution* errors are not exceptions: drivers record them on a
:class:`~querystate.statement.record.StatementRecord` via ``set_error``.
"""
from __future__ import annotations

from typing import Any


class QueryStateError(Exception):
    """Base exception for all querystate errors."""


class UnknownClauseError(QueryStateError, KeyError):
    """Raised when a clause name is not part of the cache layout.

    Args:
        key: The clause name that was requested.
        known_keys: The clause names the cache was built with.
    """

    def __init__(self, key: str, known_keys: list[str]) -> None:
        super().__init__(f"Unknown clause '{key}'. Known clauses: {known_keys}.")
        self.key = key
        self.known_keys = known_keys

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class InvalidClauseValueError(QueryStateError, ValueError):
    """Raised when a clause slot rejects a stored value.

    Args:
        key: The clause being written.
        value: The rejected value.
        reason: Why the slot rejected it.
    """

    def __init__(self, key: str, value: Any, reason: str) -> None:
        super().__init__(f"Invalid value {value!r} for clause '{key}': {reason}")
        self.key = key
        self.value = value
        self.reason = reason


class DurationNotRecordedError(QueryStateError):
    """Raised when execution timing is read before ``set_duration`` was called.

    Args:
        field: ``'start'`` or ``'end'``, whichever bound is missing.
    """

    def __init__(self, field: str) -> None:
        super().__init__(
            f"Execution {field} time has not been recorded; call set_duration() first."
        )
        self.field = field


class ConfigError(QueryStateError):
    """Raised when a :class:`~querystate.config.QueryStateConfig` is invalid.

    Args:
        message: Human-readable description.
        errors: Structured validation errors, one dict per failing field.
    """

    def __init__(
        self,
        message: str,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        super().__init__(message)
        self.errors: list[dict[str, Any]] = errors or []
