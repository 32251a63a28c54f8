from __future__ import annotations

from dataclasses import replace
from datetime import date, tzinfo
from typing import Dict, Iterable, List, Mapping, Optional

from ..common.datetime_utils import calendar_date
from ..common.validators import require_collection
from ..core.enums import Role
from ..reporting.folding import fold_by, group_by
from .hours import AnomalyHook, log_anomaly, record_hours
from .model import AggregateResult, ShiftRecord

RoleLookup = Mapping[str, "Role | str"]


def resolve_role(record: ShiftRecord, role_lookup: Optional[RoleLookup]) -> Role:
    """Role from the lookup, then the record itself, else UNKNOWN."""
    if role_lookup and record.user_email in role_lookup:
        return Role.parse(role_lookup[record.user_email])
    return Role.parse(record.role)


def aggregate_by_user(
    records: Iterable[ShiftRecord],
    role_lookup: Optional[RoleLookup] = None,
    *,
    tz: Optional[tzinfo] = None,
    on_anomaly: AnomalyHook = log_anomaly,
) -> List[AggregateResult]:
    """Per-user hours, closed-shift count and companion count.

    Only users with at least one record in ``records`` appear; open shifts
    are kept out of hours and shift counts.
    """

    def step(acc: AggregateResult, record: ShiftRecord) -> AggregateResult:
        hours = record_hours(record, resolve_role(record, role_lookup), tz=tz, on_anomaly=on_anomaly)
        return replace(
            acc,
            total_hours=acc.total_hours + hours,
            shift_count=acc.shift_count + (0 if record.is_open else 1),
            companion_shift_count=acc.companion_shift_count + (1 if record.companion else 0),
        )

    totals = fold_by(
        records,
        lambda r: r.user_email,
        initial=lambda email: AggregateResult(user_email=email, total_hours=0.0, shift_count=0, companion_shift_count=0),
        step=step,
    )
    return list(totals.values())


def group_by_calendar_date(records: Iterable[ShiftRecord], tz: Optional[tzinfo] = None) -> Dict[date, List[ShiftRecord]]:
    """Bucket shifts by the date they started on in ``tz``.

    A shift crossing midnight belongs to its clock-in day.
    """
    return group_by(
        records,
        lambda r: calendar_date(r.start_time, tz),
        sort_key=lambda r: r.start_time,
    )


def total_shift_hours(
    records: Iterable[ShiftRecord],
    role_lookup: Optional[RoleLookup] = None,
    *,
    tz: Optional[tzinfo] = None,
) -> float:
    require_collection(records, "records")
    return sum(record_hours(r, resolve_role(r, role_lookup), tz=tz) for r in records)
