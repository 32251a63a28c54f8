from __future__ import annotations

from contextlib import contextmanager
from datetime import datetime
from typing import Any, Dict, List, Optional

import pytz

from ..common.datetime_utils import ensure_aware, parse_iso_datetime
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


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def normalize_mysql_datetime(value: Any) -> Optional[datetime]:
    """Normalize MySQL DATETIME/TIMESTAMP values to aware UTC-based datetimes.

    mysql-connector can return them as:
    - naive datetime.datetime (stored as UTC)
    - string (e.g. '2026-01-31 09:00:00')
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        return ensure_aware(value)

    if isinstance(value, str):
        return parse_iso_datetime(value.replace(" ", "T", 1))

    raise TypeError(f"Unsupported MySQL DATETIME value type: {type(value)!r}")


def to_mysql_datetime(value: datetime) -> datetime:
    """Aware datetime -> naive UTC, the form stored in DATETIME columns."""
    return ensure_aware(value).astimezone(pytz.utc).replace(tzinfo=None)
