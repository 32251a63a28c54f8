from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Callable, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .common.datetime_utils import get_timezone
from .core.constants import DEFAULT_NAME_CACHE_TTL_SECONDS, DEFAULT_REPORT_TIMEZONE
from .database.connection import DBConfig, DatabaseConnection
from .payroll.service import PayrollReportService
from .reporting.service import AttendanceCalendarService, SalesCalendarService
from .sales.mysql_transaction_repository import MySQLTransactionRepository
from .users.mysql_user_role_repository import MySQLUserRoleRepository
from .users.name_cache import NameCache
from .users.resolver import NameResolver


@dataclass(frozen=True)
class Container:
    report_tz: tzinfo

    attendance_calendar_service: AttendanceCalendarService
    sales_calendar_service: SalesCalendarService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    db_config: dict,
    report_timezone: str = DEFAULT_REPORT_TIMEZONE,
    name_cache_ttl_seconds: float = DEFAULT_NAME_CACHE_TTL_SECONDS,
    clock: Optional[Callable[[], float]] = None,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_dict(db_config))
    tz = get_timezone(report_timezone)

    user_roles_repo = MySQLUserRoleRepository(conn)
    attendance_repo = MySQLAttendanceRepository(conn)
    transactions_repo = MySQLTransactionRepository(conn)

    names = NameResolver(user_roles_repo, NameCache(ttl_seconds=name_cache_ttl_seconds, clock=clock))

    return Container(
        report_tz=tz,
        attendance_calendar_service=AttendanceCalendarService(attendance_repo, user_roles_repo, names, tz=tz),
        sales_calendar_service=SalesCalendarService(transactions_repo, names, tz=tz),
        payroll_report_service=PayrollReportService(attendance_repo, user_roles_repo, names, tz=tz),
    )
