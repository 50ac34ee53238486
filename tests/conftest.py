"""Shared pytest fixtures for querystate unit tests."""
from __future__ import annotations

import pytest

from querystate.cache.clause_cache import ClauseCache
from querystate.config import QueryStateConfig
from querystate.statement.record import StatementRecord
from tests.fixtures import FIXED_NOW


@pytest.fixture
def cache() -> ClauseCache:
    """Strict cache with the default clause layout."""
    return ClauseCache()


@pytest.fixture
def permissive_cache() -> ClauseCache:
    """Cache that ignores unknown clause names instead of raising."""
    return ClauseCache(config=QueryStateConfig(strict_clauses=False))


@pytest.fixture
def record() -> StatementRecord:
    """Statement record whose clock always returns FIXED_NOW."""
    return StatementRecord(clock=lambda: FIXED_NOW)
