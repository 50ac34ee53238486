"""Runtime configuration shared by the clause cache and statement records.

Build a config directly, or validate a plain mapping (e.g. loaded from a
settings file) with :meth:`QueryStateConfig.from_mapping`::

    from querystate import ClauseCache, QueryStateConfig

    config = QueryStateConfig.from_mapping({"strict_clauses": False})
    cache = ClauseCache(config=config)
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from querystate.errors import ConfigError


class QueryStateConfig(BaseModel):
    """Behaviour switches for :class:`ClauseCache` and :class:`StatementRecord`.

    Attributes:
        strict_clauses: If ``True``, storing into an unknown clause raises
            :class:`~querystate.errors.UnknownClauseError`.  If ``False``, the
            value is dropped and a warning is logged.
        decimals: Default number of decimal places used when formatting start
            times and durations.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    strict_clauses: bool = True
    decimals: int = Field(default=6, ge=0)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "QueryStateConfig":
        """Validate ``data`` and return a config.

        Args:
            data: Plain mapping of config fields.

        Returns:
            A frozen :class:`QueryStateConfig`.

        Raises:
            ConfigError: If a field is unknown or has an invalid value.
        """
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            errors = [
                {"field": ".".join(str(p) for p in err["loc"]), "message": err["msg"]}
                for err in exc.errors()
            ]
            raise ConfigError(f"Invalid querystate configuration: {exc}", errors) from exc


#: Config used when callers pass none.
DEFAULT_CONFIG = QueryStateConfig()
