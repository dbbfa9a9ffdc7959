from __future__ import annotations

import json
from contextlib import contextmanager
from datetime import time, timedelta
from typing import Any, Dict, List, Optional

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from .connection import DatabaseConnection


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


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def fetch_count(cur) -> int:
    row = cur.fetchone()
    if not row:
        return 0
    value = row["count"] if isinstance(row, dict) else row[0]
    return int(value or 0)


def is_duplicate_key(exc: IntegrityError) -> bool:
    return getattr(exc, "errno", None) == errorcode.ER_DUP_ENTRY


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
        return time(
            hour=total_seconds // 3600,
            minute=(total_seconds % 3600) // 60,
            second=total_seconds % 60,
        )

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=int(parts[0]), minute=int(parts[1]), second=seconds)

    raise TypeError(f"Unsupported MySQL TIME value type: {type(value)!r}")


def to_json_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    return json.dumps(value)


def from_json_text(value: Optional[str]) -> Any:
    if not value:
        return None
    return json.loads(value)
