from datetime import date

import pytest
import pytz

from conftest import JST
from src.storeops.storeops.core.exceptions import ValidationError
from src.storeops.storeops.reporting.calendar import CalendarCell, month_dates, month_grid, month_range, parse_year_month


def test_parse_year_month():
    assert parse_year_month("2026-02") == (2026, 2)
    for bad in ("2026-13", "2026-2", "", "abc", None):
        with pytest.raises(ValidationError):
            parse_year_month(bad)


def test_month_dates_handles_leap_year():
    assert len(month_dates("2028-02")) == 29
    assert len(month_dates("2026-02")) == 28


def test_month_range_in_reporting_zone():
    start, end = month_range("2026-12", JST)

    assert start.astimezone(pytz.utc).isoformat() == "2026-11-30T15:00:00+00:00"
    assert end.astimezone(pytz.utc).isoformat() == "2026-12-31T15:00:00+00:00"


def test_month_grid_pads_to_sunday_start():
    # 2026-01-01 is a Thursday
    grouped = {date(2026, 1, 2): ["x", "y"]}

    cells = month_grid("2026-01", grouped)

    assert [c.day for c in cells[:4]] == [None, None, None, None]
    assert cells[4].day == date(2026, 1, 1)
    assert cells[5].records == ["x", "y"]
    assert cells[6].records == []
    assert len(cells) == 4 + 31


def test_month_grid_no_padding_when_month_starts_on_sunday():
    # 2026-02-01 is a Sunday
    cells = month_grid("2026-02", {})

    assert cells[0].day == date(2026, 2, 1)
    assert len(cells) == 28


def test_padding_cells_and_default_records_are_lists():
    assert CalendarCell(day=None).records == []
    assert all(isinstance(c.records, list) for c in month_grid("2026-01", {}))
