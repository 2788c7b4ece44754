from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, FrozenSet, List, Optional, Type

import mysql.connector

from ..core.exceptions import DomainError
from .connection import DatabaseConnection


# Raised while turning a row into a model: unknown enum value, missing column, bad JSON.
ROW_DECODE_ERRORS = (KeyError, TypeError, ValueError)


@contextmanager
def translate_errors(error_cls: Type[DomainError], message: str):
    """Re-raise connector and row-decoding errors as the given domain error."""
    try:
        yield
    except (mysql.connector.Error,) + ROW_DECODE_ERRORS as e:
        raise error_cls(f"{message}: {e}") from e


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def in_clause(values) -> str:
    """Placeholder list for an SQL IN (...) clause."""
    return ", ".join(["%s"] * len(values))


def normalize_mysql_time(value: Any) -> Optional[time]:
    """Normalize MySQL TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None:
        return None

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def time_of_day_text(value: Any) -> str:
    """Render a TIME column as "HH:MM", passing unparseable text through untouched.

    Malformed values are left for the matcher to reject per punch.
    """
    if isinstance(value, str):
        return value.strip()
    normalized = normalize_mysql_time(value)
    return normalized.strftime("%H:%M") if normalized else ""


def parse_day_list(value: Any) -> FrozenSet[int]:
    """Decode a JSON weekday list column (e.g. '[1,2,3,4,5]')."""
    if value is None or value == "":
        return frozenset()
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)
    return frozenset(int(d) for d in value)
