"""Attendance hours: billable duration of a single shift.

Every elapsed duration is rounded UP to the next quarter hour
(6h05m -> 6.25h, 6h16m -> 6.5h, 6h00m -> 6.0h). Shifts that are still open
count as zero, and shifts whose clock-out precedes clock-in count as zero and
are reported as anomalies instead of dragging totals negative.
"""

from __future__ import annotations

import logging
import math
from datetime import datetime, tzinfo
from typing import Callable, Optional

from ..core.constants import IN_PROGRESS_LABEL, QUARTER_HOUR
from ..core.enums import Role
from .factory import DurationPolicyFactory
from .model import NegativeDurationAnomaly, ShiftRecord

logger = logging.getLogger(__name__)

AnomalyHook = Callable[[NegativeDurationAnomaly], None]

_policies = DurationPolicyFactory()


def log_anomaly(anomaly: NegativeDurationAnomaly) -> None:
    logger.warning(
        "Negative shift duration, counted as 0h: shift=%s start=%s end=%s",
        anomaly.shift_id,
        anomaly.start_time.isoformat(),
        anomaly.end_time.isoformat(),
    )


def ignore_anomaly(anomaly: NegativeDurationAnomaly) -> None:
    return None


def round_up_to_quarter_hour(hours: float) -> float:
    steps = 1 / QUARTER_HOUR
    return math.ceil(hours * steps) / steps


def compute_shift_hours(
    start: datetime,
    end: Optional[datetime],
    role: Optional[Role | str] = None,
    *,
    tz: Optional[tzinfo] = None,
    shift_id: Optional[str] = None,
    on_anomaly: AnomalyHook = log_anomaly,
) -> float:
    """Rounded hours worked between ``start`` and ``end``.

    ``tz`` is the zone used for the driver night-shift hour/date checks; the
    instants' own zone is used when omitted. Negative durations count as 0
    and go to ``on_anomaly`` (a WARNING log by default).
    """
    if end is None:
        return 0.0

    policy = _policies.for_role(role)
    decision = policy.elapsed(start=start, end=end, tz=tz)

    if decision.hours < 0:
        anomaly = NegativeDurationAnomaly(
            shift_id=shift_id,
            start_time=start,
            end_time=end,
            elapsed_hours=decision.hours,
        )
        on_anomaly(anomaly)
        return 0.0

    if decision.night_shift:
        logger.debug("Night shift for shift=%s: %.2fh elapsed", shift_id, decision.hours)

    return round_up_to_quarter_hour(decision.hours)


def record_hours(
    record: ShiftRecord,
    role: Optional[Role | str] = None,
    *,
    tz: Optional[tzinfo] = None,
    on_anomaly: AnomalyHook = log_anomaly,
) -> float:
    return compute_shift_hours(
        record.start_time,
        record.end_time,
        role if role is not None else record.role,
        tz=tz,
        shift_id=record.shift_id,
        on_anomaly=on_anomaly,
    )


def format_hours(total_hours: float) -> str:
    hours = math.floor(total_hours)
    minutes = round((total_hours - hours) * 60)
    return f"{hours}時間{minutes}分"


def format_duration(
    start: datetime,
    end: Optional[datetime],
    role: Optional[Role | str] = None,
    *,
    tz: Optional[tzinfo] = None,
    on_anomaly: AnomalyHook = log_anomaly,
) -> str:
    """Human label such as "6時間15分"; "勤務中" while the shift is open."""
    if end is None:
        return IN_PROGRESS_LABEL
    return format_hours(compute_shift_hours(start, end, role, tz=tz, on_anomaly=on_anomaly))
