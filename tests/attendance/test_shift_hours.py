from __future__ import annotations

import logging
from datetime import timedelta

import pytest
import pytz

from conftest import JST, jst
from src.storeops.storeops.attendance.hours import (
    compute_shift_hours,
    format_duration,
    format_hours,
    round_up_to_quarter_hour,
)
from src.storeops.storeops.core.enums import Role


def test_five_minutes_rounds_up_to_quarter_hour():
    assert compute_shift_hours(jst(2026, 1, 5, 9, 0), jst(2026, 1, 5, 9, 5)) == 0.25


@pytest.mark.parametrize(
    "minutes, expected",
    [
        (0, 0.0),
        (365, 6.25),  # 6h05m
        (376, 6.5),  # 6h16m
        (360, 6.0),
        (361, 6.25),
        (15, 0.25),
        (16, 0.5),
    ],
)
def test_rounding_examples(minutes, expected):
    start = jst(2026, 1, 5, 9, 0)
    assert compute_shift_hours(start, start + timedelta(minutes=minutes), Role.CAST) == expected


def test_driver_same_day_evening_shift():
    hours = compute_shift_hours(jst(2026, 1, 5, 18, 0), jst(2026, 1, 5, 23, 59), Role.DRIVER)
    assert hours == 6.0


def test_driver_night_shift_uses_literal_elapsed_time():
    hours = compute_shift_hours(jst(2026, 1, 5, 22, 0), jst(2026, 1, 6, 5, 0), "driver")
    assert hours == 7.0


def test_night_shift_not_anchored_to_midnight_for_any_role():
    start, end = jst(2026, 1, 5, 19, 10), jst(2026, 1, 6, 2, 0)
    assert compute_shift_hours(start, end, Role.DRIVER) == compute_shift_hours(start, end, Role.CAST) == 7.0


def test_open_shift_is_zero_for_every_role():
    start = jst(2026, 1, 5, 22, 0)
    for role in (None, "driver", Role.OWNER, Role.UNKNOWN, "nonsense"):
        assert compute_shift_hours(start, None, role) == 0


def test_negative_duration_is_zero_and_reported(caplog):
    seen = []
    with caplog.at_level(logging.WARNING):
        hours = compute_shift_hours(
            jst(2026, 1, 5, 10, 0),
            jst(2026, 1, 5, 9, 30),
            Role.CAST,
            shift_id="s-42",
            on_anomaly=seen.append,
        )

    assert hours == 0
    assert [a.shift_id for a in seen] == ["s-42"]
    assert seen[0].elapsed_hours == pytest.approx(-0.5)


def test_negative_duration_is_logged_by_default(caplog):
    with caplog.at_level(logging.WARNING):
        compute_shift_hours(jst(2026, 1, 5, 10, 0), jst(2026, 1, 5, 9, 30), shift_id="s-7")

    assert "Negative shift duration" in caplog.text
    assert "s-7" in caplog.text


def test_unknown_role_uses_default_rounding():
    start, end = jst(2026, 1, 5, 22, 0), jst(2026, 1, 6, 5, 7)
    assert compute_shift_hours(start, end, "manager") == compute_shift_hours(start, end, None) == 7.25


def test_instants_in_other_zones_give_same_hours():
    start = jst(2026, 1, 5, 22, 0)
    end = jst(2026, 1, 6, 5, 0).astimezone(pytz.utc)
    assert compute_shift_hours(start, end, Role.DRIVER, tz=JST) == 7.0


@pytest.mark.parametrize("seconds", list(range(0, 12 * 3600, 997)))
def test_quarter_hour_ceiling_property(seconds):
    start = jst(2026, 3, 1, 8, 0)
    end = start + timedelta(seconds=seconds)
    elapsed = (end - start).total_seconds() / 3600

    hours = compute_shift_hours(start, end, Role.CAST)

    assert (hours * 4).is_integer()
    assert hours >= elapsed
    assert hours - elapsed < 0.25


def test_compute_is_deterministic():
    start, end = jst(2026, 1, 5, 22, 3), jst(2026, 1, 6, 4, 11)
    assert compute_shift_hours(start, end, Role.DRIVER) == compute_shift_hours(start, end, Role.DRIVER)


def test_round_up_to_quarter_hour():
    assert round_up_to_quarter_hour(6.083) == 6.25
    assert round_up_to_quarter_hour(6.267) == 6.5
    assert round_up_to_quarter_hour(6.0) == 6.0
    assert round_up_to_quarter_hour(0.0) == 0.0


def test_format_duration():
    assert format_duration(jst(2026, 1, 5, 9, 0), jst(2026, 1, 5, 15, 5)) == "6時間15分"
    assert format_duration(jst(2026, 1, 5, 9, 0), jst(2026, 1, 5, 17, 0)) == "8時間0分"
    assert format_duration(jst(2026, 1, 5, 9, 0), None) == "勤務中"


def test_format_hours_rounds_minutes():
    assert format_hours(2.75) == "2時間45分"
    assert format_hours(0.5) == "0時間30分"
