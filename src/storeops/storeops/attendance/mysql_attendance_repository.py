from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime, to_mysql_datetime
from .model import ShiftRecord
from .repository import AttendanceRepository


def _to_shift(r: Dict[str, Any]) -> ShiftRecord:
    return ShiftRecord(
        shift_id=str(r["id"]),
        user_email=(r.get("user_email") or "").strip().lower(),
        start_time=normalize_mysql_datetime(r["start_time"]),
        end_time=normalize_mysql_datetime(r.get("end_time")),
        role=Role.parse(r.get("role")),
        companion=bool(r.get("companion_checked") or False),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_in_range(
        self,
        *,
        start: datetime,
        end: datetime,
        user_email: Optional[str] = None,
    ) -> Sequence[ShiftRecord]:
        sql = """
            SELECT a.id, a.user_email, a.start_time, a.end_time, a.companion_checked, ur.role
            FROM attendances a
            LEFT JOIN user_roles ur ON ur.email = a.user_email
            WHERE a.start_time >= %s AND a.start_time < %s
        """
        params: list = [to_mysql_datetime(start), to_mysql_datetime(end)]

        if user_email:
            sql += " AND a.user_email = %s"
            params.append(user_email.strip().lower())

        sql += " ORDER BY a.start_time ASC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_shift(r) for r in fetchall(cur)]
