from __future__ import annotations

import calendar
import re
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Generic, List, Mapping, Optional, Sequence, Tuple, TypeVar

from ..common.datetime_utils import ensure_aware
from ..core.exceptions import ValidationError

T = TypeVar("T")

_YEAR_MONTH = re.compile(r"^(\d{4})-(\d{2})$")


@dataclass(frozen=True)
class CalendarCell(Generic[T]):
    """One square of a month calendar. Leading padding cells have ``day=None``."""

    day: Optional[date]
    records: Sequence[T] = field(default_factory=list)


def parse_year_month(value: str) -> Tuple[int, int]:
    match = _YEAR_MONTH.match((value or "").strip())
    if not match:
        raise ValidationError(f"Invalid month (expected YYYY-MM): {value!r}")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month (expected YYYY-MM): {value!r}")
    return year, month


def month_dates(year_month: str) -> List[date]:
    year, month = parse_year_month(year_month)
    days = calendar.monthrange(year, month)[1]
    return [date(year, month, d) for d in range(1, days + 1)]


def month_range(year_month: str, tz: Optional[tzinfo] = None) -> Tuple[datetime, datetime]:
    """Half-open ``[start, end)`` instants of a month as seen in ``tz``."""
    first = month_dates(year_month)[0]
    next_first = first.replace(day=28) + timedelta(days=4)
    next_first = next_first.replace(day=1)
    start = ensure_aware(datetime.combine(first, datetime.min.time()), tz)
    end = ensure_aware(datetime.combine(next_first, datetime.min.time()), tz)
    return start, end


def month_grid(year_month: str, grouped: Mapping[date, Sequence[T]]) -> List[CalendarCell[T]]:
    """Sunday-first month grid; days without records get an empty list."""
    days = month_dates(year_month)
    # date.weekday(): Monday=0 .. Sunday=6
    leading = (days[0].weekday() + 1) % 7

    cells: List[CalendarCell[T]] = [CalendarCell(day=None, records=[]) for _ in range(leading)]
    for day in days:
        cells.append(CalendarCell(day=day, records=list(grouped.get(day, []))))
    return cells
