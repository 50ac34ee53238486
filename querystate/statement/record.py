"""Statement record: one statement's text, bindings, and execution outcome.

Lifecycle
---------
1. A compiler hands over raw text and positional bindings
   (:meth:`StatementRecord.set_statement`), optionally with a final,
   rewritten text (:meth:`StatementRecord.set_final_statement`).
2. A driver may rewrite table prefixes before execution
   (:meth:`StatementRecord.swap_table_prefix`).
3. After execution the driver records timing, affected rows, the last
   generated id, and any error.
4. Consumers read the record, or a frozen :class:`StatementSnapshot`, for
   logging and debugging.

Execution errors are stored as data.  Nothing in this module raises because
a statement failed.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from querystate.clock import Clock, system_clock
from querystate.config import DEFAULT_CONFIG, QueryStateConfig
from querystate.errors import DurationNotRecordedError
from querystate.statement.patterns import is_write_statement, swap_prefix

logger = logging.getLogger(__name__)

ErrorCode = int | str


class StatementError(BaseModel):
    """One recorded execution error.

    Attributes:
        code: Driver error code (numeric or SQLSTATE-style string).
        message: Driver error message.
    """

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str


class StatementSnapshot(BaseModel):
    """Read-only copy of a :class:`StatementRecord` for inspection consumers."""

    model_config = ConfigDict(frozen=True)

    sql: str | None = None
    bindings: list[Any] = Field(default_factory=list)
    final_sql: str | None = None
    start_time: float | None = None
    end_time: float | None = None
    duration: str | None = None
    affected_rows: int | None = None
    last_insert_id: Any = None
    errors: list[StatementError] = Field(default_factory=list)
    is_write: bool = False


def _format_seconds(value: Decimal, decimals: int) -> str:
    """Format ``value`` with exactly ``decimals`` places, rounding half up."""
    return f"{value.quantize(Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP):f}"


def _to_decimal(seconds: float) -> Decimal:
    # repr() gives the shortest string that round-trips, so 2.5005 stays 2.5005.
    return Decimal(repr(seconds))


class StatementRecord:
    """Text, bindings, timing, and outcome of one statement execution.

    Args:
        config: Behaviour switches; defaults to :data:`DEFAULT_CONFIG`.
        clock: Source of "now" when :meth:`set_duration` is called without
            an end time.  Defaults to :func:`~querystate.clock.system_clock`.
    """

    def __init__(
        self,
        config: QueryStateConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._config = config or DEFAULT_CONFIG
        self._clock = clock or system_clock
        self._sql: str | None = None
        self._bindings: list[Any] = []
        self._final_sql: str | None = None
        self._start_time: float | None = None
        self._end_time: float | None = None
        self._affected_rows: int | None = None
        self._last_insert_id: Any = None
        self._errors: dict[ErrorCode, str] = {}

    # ------------------------------------------------------------------
    # Statement text and bindings
    # ------------------------------------------------------------------

    def set_statement(
        self,
        sql: str,
        bindings: Sequence[Any] | None = None,
    ) -> StatementRecord:
        """Set the raw statement text and its positional bindings together.

        Args:
            sql: Raw statement text, with placeholders.
            bindings: Positional bind values; replaced with ``[]`` when omitted.

        Returns:
            This record, for chaining.
        """
        self._sql = sql
        self._bindings = list(bindings) if bindings is not None else []
        return self

    def set_bindings(self, bindings: Sequence[Any]) -> StatementRecord:
        self._bindings = list(bindings)
        return self

    def get_bindings(self) -> list[Any]:
        return list(self._bindings)

    def get_sql_statement(self) -> str | None:
        """Return the raw statement text as handed over by the compiler."""
        return self._sql

    def set_final_statement(self, sql: str) -> StatementRecord:
        self._final_sql = sql
        return self

    def get_final_statement(self) -> str | None:
        """Return the final statement text after binding or prefix rewriting."""
        return self._final_sql

    # ------------------------------------------------------------------
    # Timing
    # ------------------------------------------------------------------

    def set_duration(self, start: float, end: float | None = None) -> StatementRecord:
        """Record the execution window in seconds.

        Args:
            start: Execution start time.
            end: Execution end time; read from the clock when omitted.

        Returns:
            This record, for chaining.
        """
        if end is None:
            end = self._clock()
        self._start_time = start
        self._end_time = end
        logger.debug("Statement executed in %.6fs", end - start)
        return self

    def get_start_time(
        self,
        human_readable: bool = False,
        decimals: int | None = None,
    ) -> float | str | None:
        """Return the execution start time.

        Args:
            human_readable: If ``True``, return a fixed-decimal string instead
                of the raw float.
            decimals: Decimal places for the string form; defaults to
                ``config.decimals``.

        Returns:
            The raw start time (``None`` if not recorded yet), or its
            formatted string.

        Raises:
            DurationNotRecordedError: If the formatted string is requested
                before a duration has been recorded.
        """
        if not human_readable:
            return self._start_time
        if self._start_time is None:
            raise DurationNotRecordedError("start")
        return _format_seconds(_to_decimal(self._start_time), self._decimals(decimals))

    def get_duration(self, decimals: int | None = None) -> str:
        """Return ``end - start`` as a fixed-decimal string.

        Rounding is half-up on the decimal values of both bounds, so
        ``set_duration(1.0, 2.5005)`` gives ``"1.501"`` with three decimals.

        Args:
            decimals: Decimal places; defaults to ``config.decimals``.

        Raises:
            DurationNotRecordedError: If start or end has not been recorded.
        """
        if self._start_time is None:
            raise DurationNotRecordedError("start")
        if self._end_time is None:
            raise DurationNotRecordedError("end")
        elapsed = _to_decimal(self._end_time) - _to_decimal(self._start_time)
        return _format_seconds(elapsed, self._decimals(decimals))

    def has_duration(self) -> bool:
        return self._start_time is not None and self._end_time is not None

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def set_error(self, code: Any, message: Any) -> StatementRecord:
        """Record an execution error under ``code``.

        A repeated code overwrites its message but keeps its position, so the
        primary (first-recorded) error does not change.  Codes other than
        ``int`` or ``str`` are stored as their string form, and the message
        is always stored as a string (an exception object becomes its text).
        """
        if isinstance(code, bool) or not isinstance(code, (int, str)):
            code = str(code)
        message = str(message)
        self._errors[code] = message
        logger.debug("Statement error %s: %s", code, message)
        return self

    def has_error(self) -> bool:
        return bool(self._errors)

    @property
    def primary_error(self) -> StatementError | None:
        """The first error recorded, or ``None``."""
        if not self._errors:
            return None
        code, message = next(iter(self._errors.items()))
        return StatementError(code=code, message=message)

    @property
    def errors(self) -> list[StatementError]:
        """Every recorded error, in the order first recorded."""
        return [StatementError(code=code, message=message) for code, message in self._errors.items()]

    def get_error_code(self) -> ErrorCode | Literal[False]:
        """Return the primary error code, or ``False`` when there is no error."""
        error = self.primary_error
        return error.code if error is not None else False

    def get_error_message(self) -> str | Literal[False]:
        """Return the primary error message, or ``False`` when there is no error."""
        error = self.primary_error
        return error.message if error is not None else False

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def set_affected_rows(self, affected_rows: int) -> StatementRecord:
        self._affected_rows = affected_rows
        return self

    def get_affected_rows(self) -> int | None:
        return self._affected_rows

    def set_last_insert_id(self, last_insert_id: Any) -> StatementRecord:
        """Record the identifier generated by the last INSERT.

        Stored separately from the affected-row count.
        """
        self._last_insert_id = last_insert_id
        return self

    def get_last_insert_id(self) -> Any:
        return self._last_insert_id

    # ------------------------------------------------------------------
    # Text inspection and rewriting
    # ------------------------------------------------------------------

    def is_write_statement(self) -> bool:
        """Return ``True`` if the raw statement mutates data or schema."""
        return is_write_statement(self._sql)

    def swap_table_prefix(self, search: str, replace: str) -> StatementRecord:
        """Rewrite table prefix ``search`` to ``replace``.

        Works on the final statement if one is set, otherwise on the raw
        statement, and stores the result as the final statement.

        Args:
            search: Prefix currently used in the statement (e.g. ``'tbl_'``).
            replace: Prefix to substitute (e.g. ``'app_'``).

        Returns:
            This record, for chaining.
        """
        sql = self._final_sql or self._sql or ""
        self._final_sql = swap_prefix(sql, search, replace)
        return self

    # ------------------------------------------------------------------
    # Inspection
    # ------------------------------------------------------------------

    def snapshot(self) -> StatementSnapshot:
        """Return a frozen copy of the current record state."""
        return StatementSnapshot(
            sql=self._sql,
            bindings=list(self._bindings),
            final_sql=self._final_sql,
            start_time=self._start_time,
            end_time=self._end_time,
            duration=self.get_duration() if self.has_duration() else None,
            affected_rows=self._affected_rows,
            last_insert_id=self._last_insert_id,
            errors=self.errors,
            is_write=self.is_write_statement(),
        )

    def _decimals(self, decimals: int | None) -> int:
        return self._config.decimals if decimals is None else decimals

    def __str__(self) -> str:
        return self._final_sql or ""

    def __repr__(self) -> str:
        return f"StatementRecord(sql={self._sql!r}, has_error={self.has_error()})"
