"""Example: hours computation and aggregation without Flask or a database.

Controllers stay thin; the reporting rules live in plain functions/services.
"""

from datetime import datetime

import pytz

from src.storeops.storeops.attendance.aggregation import aggregate_by_user, group_by_calendar_date
from src.storeops.storeops.attendance.hours import format_duration
from src.storeops.storeops.attendance.model import ShiftRecord
from src.storeops.storeops.core.enums import Role


def main():
    tokyo = pytz.timezone("Asia/Tokyo")
    shifts = [
        ShiftRecord("s1", "driver@example.com", tokyo.localize(datetime(2026, 1, 9, 22, 0)), tokyo.localize(datetime(2026, 1, 10, 5, 0))),
        ShiftRecord("s2", "cast@example.com", tokyo.localize(datetime(2026, 1, 10, 19, 0)), tokyo.localize(datetime(2026, 1, 10, 23, 20)), companion=True),
        ShiftRecord("s3", "cast@example.com", tokyo.localize(datetime(2026, 1, 11, 19, 0))),
    ]
    roles = {"driver@example.com": Role.DRIVER, "cast@example.com": Role.CAST}

    for day, records in sorted(group_by_calendar_date(shifts, tokyo).items()):
        for r in records:
            print(day, r.user_email, format_duration(r.start_time, r.end_time, roles[r.user_email], tz=tokyo))

    for result in aggregate_by_user(shifts, roles, tz=tokyo):
        print(result)


if __name__ == "__main__":
    main()
