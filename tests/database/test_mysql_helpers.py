from datetime import time, timedelta

import mysql.connector
import pytest

from src.attendance_reconciliation.attendance_reconciliation.core.exceptions import DataFetchError
from src.attendance_reconciliation.attendance_reconciliation.database.bootstrap import iter_sql_statements
from src.attendance_reconciliation.attendance_reconciliation.database.mysql_base import (
    in_clause,
    normalize_mysql_time,
    parse_day_list,
    time_of_day_text,
    translate_errors,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (time(9, 30), time(9, 30)),
        (timedelta(hours=22), time(22, 0)),
        (timedelta(hours=8, minutes=5, seconds=7), time(8, 5, 7)),
        ("06:00:00", time(6, 0)),
        (None, None),
    ],
)
def test_normalize_mysql_time(value, expected):
    assert normalize_mysql_time(value) == expected


def test_time_of_day_text_keeps_bad_text_for_later_rejection():
    assert time_of_day_text(timedelta(hours=9)) == "09:00"
    assert time_of_day_text(" 25:99 ") == "25:99"


@pytest.mark.parametrize(
    "value, expected",
    [
        ("[1,2,3,4,5]", {1, 2, 3, 4, 5}),
        (b"[0, 6]", {0, 6}),
        ([3], {3}),
        (None, set()),
        ("", set()),
    ],
)
def test_parse_day_list(value, expected):
    assert parse_day_list(value) == frozenset(expected)


def test_in_clause():
    assert in_clause(["a", "b", "c"]) == "%s, %s, %s"


def test_translate_errors_wraps_connector_errors():
    with pytest.raises(DataFetchError, match="Failed to load shifts"):
        with translate_errors(DataFetchError, "Failed to load shifts"):
            raise mysql.connector.Error("connection refused")


def test_sql_splitter_ignores_semicolons_in_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT \"x;y\";\nSELECT 1"

    assert list(iter_sql_statements(sql)) == [
        "INSERT INTO t VALUES ('a;b')",
        'SELECT "x;y"',
        "SELECT 1",
    ]
