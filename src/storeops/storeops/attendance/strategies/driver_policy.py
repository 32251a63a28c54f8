from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

from ...common.datetime_utils import to_local
from ...core.constants import NIGHT_SHIFT_END_HOUR, NIGHT_SHIFT_START_HOUR
from .base import DurationPolicy, ElapsedDecision, elapsed_hours


def is_night_shift(start: datetime, end: datetime, tz: Optional[tzinfo] = None) -> bool:
    """Clock-in at/after 18:00, clock-out at/before 06:xx on a later calendar day."""
    local_start = to_local(start, tz)
    local_end = to_local(end, tz)
    return (
        local_start.hour >= NIGHT_SHIFT_START_HOUR
        and local_end.hour <= NIGHT_SHIFT_END_HOUR
        and local_start.date() != local_end.date()
    )


class DriverDurationPolicy(DurationPolicy):
    """Drivers: night shifts are flagged but still use literal elapsed time.

    Night shifts used to be counted from the next midnight; that anchoring was
    removed and must not come back without sign-off from the shop owner.
    """

    def elapsed(self, *, start: datetime, end: datetime, tz: Optional[tzinfo] = None) -> ElapsedDecision:
        return ElapsedDecision(hours=elapsed_hours(start, end), night_shift=is_night_shift(start, end, tz))
