from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, tzinfo
from typing import Dict, List, Optional

from ..attendance.aggregation import aggregate_by_user, resolve_role
from ..attendance.hours import format_hours, ignore_anomaly, log_anomaly, record_hours
from ..attendance.model import NegativeDurationAnomaly
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import calendar_date, ensure_aware, to_local
from ..core.constants import IN_PROGRESS_LABEL
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..users.repository import UserRoleRepository
from ..users.resolver import NameResolver


@dataclass(frozen=True)
class ReportData:
    rows: List[dict]
    summary: List[dict]
    anomalies: List[str] = field(default_factory=list)


def day_range(start: date, end: date, tz: Optional[tzinfo]) -> tuple[datetime, datetime]:
    """Instants covering the inclusive local-date range ``start..end``."""
    if end < start:
        raise ValidationError("End date must not be before start date")
    return (
        ensure_aware(datetime.combine(start, time.min), tz),
        ensure_aware(datetime.combine(end + timedelta(days=1), time.min), tz),
    )


class PayrollReportService:
    """Hours per shift and per staff member over a date range.

    Pay amounts are not computed here; only hours feed payroll.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        user_roles: UserRoleRepository,
        names: NameResolver,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._attendance = attendance
        self._user_roles = user_roles
        self._names = names
        self._tz = tz

    def _role_lookup(self) -> Dict[str, Role]:
        return {u.email: u.role for u in self._user_roles.list_all()}

    def build_report(
        self,
        *,
        start: date,
        end: date,
        user_email: Optional[str] = None,
    ) -> ReportData:
        range_start, range_end = day_range(start, end, self._tz)
        records = self._attendance.list_in_range(start=range_start, end=range_end, user_email=user_email)
        roles = self._role_lookup()
        self._names.prefetch(r.user_email for r in records)

        anomalies: List[NegativeDurationAnomaly] = []

        def report_anomaly(anomaly: NegativeDurationAnomaly) -> None:
            log_anomaly(anomaly)
            anomalies.append(anomaly)

        out_rows: List[dict] = []
        for r in records:
            role = resolve_role(r, roles)
            seen = len(anomalies)
            hours = record_hours(r, role, tz=self._tz, on_anomaly=report_anomaly)
            out_rows.append(
                {
                    "id": r.shift_id,
                    "user_email": r.user_email,
                    "display_name": self._names.name_for_email(r.user_email),
                    "role": role.value,
                    "work_date": calendar_date(r.start_time, self._tz).isoformat(),
                    "check_in": to_local(r.start_time, self._tz).strftime("%H:%M"),
                    "check_out": to_local(r.end_time, self._tz).strftime("%H:%M") if r.end_time else "-",
                    "hours": hours,
                    "worked": IN_PROGRESS_LABEL if r.is_open else format_hours(hours),
                    "companion": r.companion,
                    "anomaly": len(anomalies) > seen,
                }
            )

        # Anomalies were already reported while building rows.
        totals = aggregate_by_user(records, roles, tz=self._tz, on_anomaly=ignore_anomaly)
        summary = [
            {
                "user_email": t.user_email,
                "display_name": self._names.name_for_email(t.user_email),
                "total_hours": t.total_hours,
                "total_label": format_hours(t.total_hours),
                "shift_count": t.shift_count,
                "companion_shift_count": t.companion_shift_count,
            }
            for t in totals
        ]
        summary.sort(key=lambda x: (-x["total_hours"], x["user_email"]))

        return ReportData(rows=out_rows, summary=summary, anomalies=[a.shift_id or "" for a in anomalies])
