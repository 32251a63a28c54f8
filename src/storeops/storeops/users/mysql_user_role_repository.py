from __future__ import annotations

from typing import Dict, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import UserRole
from .repository import UserRoleRepository


class MySQLUserRoleRepository(UserRoleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[UserRole]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT email, display_name, role
                FROM user_roles
                ORDER BY display_name
                """
            )
            return [
                UserRole(
                    email=(r["email"] or "").strip().lower(),
                    display_name=r.get("display_name") or "",
                    role=Role.parse(r.get("role")),
                )
                for r in fetchall(cur)
            ]

    def get_display_names(self, emails: Sequence[str]) -> Dict[str, str]:
        keys = [e.strip().lower() for e in emails if e and e.strip()]
        if not keys:
            return {}

        placeholders = ", ".join(["%s"] * len(keys))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT email, display_name FROM user_roles WHERE LOWER(email) IN ({placeholders})",
                tuple(keys),
            )
            return {
                (r["email"] or "").strip().lower(): (r.get("display_name") or "").strip()
                for r in fetchall(cur)
                if r.get("display_name")
            }
