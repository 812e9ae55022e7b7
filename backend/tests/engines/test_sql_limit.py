"""Unit tests for engines.sql.limit."""

import pytest

from oraquery.engines.sql import apply_limit


def test_zero_leaves_sql_unchanged():
    sql = "SELECT * FROM t"
    assert apply_limit(sql, 0) == sql


def test_positive_appends_fetch_first():
    assert apply_limit("SELECT * FROM t", 100) == (
        "SELECT * FROM t FETCH FIRST 100 ROWS ONLY"
    )


@pytest.mark.parametrize("limit", [1000, 10000, 7])
def test_any_positive_value(limit: int):
    assert apply_limit("SELECT 1 FROM dual", limit).endswith(
        f" FETCH FIRST {limit} ROWS ONLY"
    )


def test_trailing_semicolon_is_not_stripped():
    assert apply_limit("SELECT * FROM t;", 10) == "SELECT * FROM t; FETCH FIRST 10 ROWS ONLY"


def test_negative_rejected():
    with pytest.raises(ValueError, match="row_limit"):
        apply_limit("SELECT 1 FROM dual", -1)
