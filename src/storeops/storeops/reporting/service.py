from __future__ import annotations

from datetime import datetime, timedelta, tzinfo
from typing import Dict, List, Optional, Sequence

from ..attendance.aggregation import aggregate_by_user, group_by_calendar_date, resolve_role
from ..attendance.hours import format_duration, format_hours, ignore_anomaly, record_hours
from ..attendance.model import ShiftRecord
from ..attendance.repository import AttendanceRepository
from ..core.constants import BUSINESS_DAY_FETCH_PADDING_HOURS, COMMON_ATTRIBUTION_LABEL
from ..core.enums import Role
from ..core.exceptions import ValidationError
from ..sales.aggregation import group_transactions_by_date, sum_by_attribution, sum_by_payment_category
from ..sales.model import TransactionRecord
from ..sales.repository import TransactionRepository
from ..users.repository import UserRoleRepository
from ..users.resolver import NameResolver, display_or_email
from .calendar import month_grid, month_range


def _iso(value: Optional[datetime], tz: Optional[tzinfo]) -> Optional[str]:
    if value is None:
        return None
    return (value.astimezone(tz) if tz is not None else value).isoformat()


class AttendanceCalendarService:
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

    def _shift_row(self, r: ShiftRecord, roles: Dict[str, Role]) -> dict:
        role = resolve_role(r, roles)
        return {
            "id": r.shift_id,
            "user_email": r.user_email,
            "role": role.value,
            "start_time": _iso(r.start_time, self._tz),
            "end_time": _iso(r.end_time, self._tz),
            "hours": record_hours(r, role, tz=self._tz),
            "worked": format_duration(r.start_time, r.end_time, role, tz=self._tz, on_anomaly=ignore_anomaly),
            "companion": r.companion,
        }

    def shifts_in_range(self, *, start: datetime, end: datetime) -> List[dict]:
        """Flat list of shifts with display names, oldest first."""
        if end <= start:
            raise ValidationError("'to' must be after 'from'")

        records = self._attendance.list_in_range(start=start, end=end)
        roles = self._role_lookup()
        self._names.prefetch(r.user_email for r in records)

        rows = []
        for r in records:
            row = self._shift_row(r, roles)
            row["display_name"] = self._names.name_for_email(r.user_email)
            rows.append(row)
        return rows

    def month_view(self, year_month: str) -> dict:
        start, end = month_range(year_month, self._tz)
        records = self._attendance.list_in_range(start=start, end=end)
        roles = self._role_lookup()
        grouped = group_by_calendar_date(records, self._tz)

        cells = []
        for cell in month_grid(year_month, grouped):
            shifts = [self._shift_row(r, roles) for r in cell.records]
            cells.append(
                {
                    "date": cell.day.isoformat() if cell.day else None,
                    "shifts": shifts,
                    "total_hours": sum(s["hours"] for s in shifts),
                    "shift_count": len(shifts),
                    "companion_count": sum(1 for s in shifts if s["companion"]),
                }
            )

        # Per-shift anomalies were logged while building the cells.
        totals = aggregate_by_user(records, roles, tz=self._tz, on_anomaly=ignore_anomaly)
        summary = sorted(
            (
                {
                    "user_email": t.user_email,
                    "total_hours": t.total_hours,
                    "total_label": format_hours(t.total_hours),
                    "shift_count": t.shift_count,
                    "companion_shift_count": t.companion_shift_count,
                }
                for t in totals
            ),
            key=lambda x: x["user_email"],
        )
        return {"month": year_month, "cells": cells, "summary": summary}


class SalesCalendarService:
    def __init__(
        self,
        transactions: TransactionRepository,
        names: NameResolver,
        *,
        tz: Optional[tzinfo] = None,
    ):
        self._transactions = transactions
        self._names = names
        self._tz = tz

    def _totals(self, records: Sequence[TransactionRecord]) -> Dict[str, int]:
        return {method.value: amount for method, amount in sum_by_payment_category(records).items()}

    def _attribution_label(self, email: Optional[str]) -> str:
        if not email:
            return COMMON_ATTRIBUTION_LABEL
        return display_or_email(email, self._names.name_for_email(email))

    def month_view(self, year_month: str) -> dict:
        start, end = month_range(year_month, self._tz)
        padding = timedelta(hours=BUSINESS_DAY_FETCH_PADDING_HOURS)
        fetched = self._transactions.list_in_range(start=start - padding, end=end + padding)
        grouped = group_transactions_by_date(fetched, self._tz)
        grid = month_grid(year_month, grouped)
        # Sales booked on a business date outside this month stay out of its totals.
        records = [t for cell in grid for t in cell.records]
        self._names.prefetch(r.attributed_to for r in records)

        cells = []
        for cell in grid:
            cells.append(
                {
                    "date": cell.day.isoformat() if cell.day else None,
                    "transactions": [
                        {
                            "id": t.transaction_id,
                            "payment_method": t.payment_method.value,
                            "payment_label": t.payment_method.label,
                            "amount": t.amount,
                            "memo": t.memo or "",
                            "attributed_to": t.attributed_to,
                            "occurred_at": _iso(t.occurred_at, self._tz),
                        }
                        for t in cell.records
                    ],
                    "totals": self._totals(cell.records),
                }
            )

        by_attribution = [
            {"attributed_to": key, "label": self._attribution_label(key), "amount": amount}
            for key, amount in sum_by_attribution(records).items()
        ]
        by_attribution.sort(key=lambda x: (x["attributed_to"] is None, x["attributed_to"] or ""))

        return {
            "month": year_month,
            "cells": cells,
            "totals": self._totals(records),
            "by_attribution": by_attribution,
        }
