"""Unit tests for statement text helpers."""

from __future__ import annotations

import pytest

from querystate.statement.patterns import WRITE_VERBS, is_write_statement, swap_prefix
from tests.fixtures import PREFIXED_SELECT


@pytest.mark.parametrize(
    "sql",
    [
        "INSERT INTO t (a) VALUES (1)",
        "  update t set a = 1",
        '"DELETE FROM t"',
        "\n\tTRUNCATE t",
        "set names utf8",
        "ReIndex idx",
    ],
)
def test_write_statements_detected(sql):
    assert is_write_statement(sql)


@pytest.mark.parametrize(
    "sql",
    [
        "SELECT * FROM t",
        "WITH x AS (SELECT 1) SELECT * FROM x",
        "INSERT",
        "UPDATEt SET a = 1",
        "SHOW TABLES",
        "",
        None,
    ],
)
def test_read_or_incomplete_statements_not_detected(sql):
    assert not is_write_statement(sql)


def test_every_write_verb_is_detected():
    for verb in WRITE_VERBS:
        assert is_write_statement(f"{verb.lower()} something")


def test_swap_prefix_rewrites_table_and_qualified_column():
    assert swap_prefix(PREFIXED_SELECT, "tbl_", "app_") == (
        "SELECT * FROM app_users WHERE app_users.id=1"
    )


def test_swap_prefix_skips_prefix_inside_identifier():
    sql = "SELECT * FROM subtbl_users JOIN tbl_orders"
    assert swap_prefix(sql, "tbl_", "app_") == "SELECT * FROM subtbl_users JOIN app_orders"


def test_swap_prefix_at_start_of_string():
    assert swap_prefix("tbl_users", "tbl_", "app_") == "app_users"


def test_swap_prefix_after_quote_and_parenthesis():
    sql = 'SELECT COUNT(*) FROM "tbl_users" WHERE id IN (SELECT id FROM tbl_bans)'
    assert swap_prefix(sql, "tbl_", "x_") == (
        'SELECT COUNT(*) FROM "x_users" WHERE id IN (SELECT id FROM x_bans)'
    )


def test_swap_prefix_requires_trailing_name():
    assert swap_prefix("tbl_ x", "tbl_", "app_") == "tbl_ x"
    assert swap_prefix("SELECT * FROM tbl_", "tbl_", "app_") == "SELECT * FROM tbl_"


def test_swap_prefix_matches_search_literally():
    assert swap_prefix("SELECT * FROM t.users", "t.", "s.") == "SELECT * FROM s.users"
    assert swap_prefix("SELECT * FROM tXusers", "t.", "s.") == "SELECT * FROM tXusers"


def test_swap_prefix_replacement_is_literal():
    assert swap_prefix("FROM tbl_users", "tbl_", r"\1_") == r"FROM \1_users"


def test_swap_prefix_empty_search_is_noop():
    assert swap_prefix(PREFIXED_SELECT, "", "app_") == PREFIXED_SELECT
