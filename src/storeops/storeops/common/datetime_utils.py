from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional

import pytz

from ..core.exceptions import ValidationError


def get_timezone(name: str) -> tzinfo:
    """Resolve an IANA zone name (e.g. "Asia/Tokyo")."""
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError as exc:
        raise ValidationError(f"Unknown timezone: {name}") from exc


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"Invalid date: {value!r}") from exc


def parse_iso_datetime(value: str, *, default_tz: Optional[tzinfo] = None) -> datetime:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Accepts a trailing "Z". Naive values are placed in ``default_tz`` (UTC when
    not given).
    """
    if not value or not value.strip():
        raise ValidationError("Missing timestamp")
    raw = value.strip()
    if raw.endswith("Z"):
        raw = raw[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(raw)
    except ValueError as exc:
        raise ValidationError(f"Invalid timestamp: {value!r}") from exc
    return ensure_aware(parsed, default_tz)


def ensure_aware(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    """Attach ``tz`` (UTC by default) to naive datetimes, e.g. MySQL DATETIME."""
    if value.tzinfo is not None and value.utcoffset() is not None:
        return value
    zone = tz or pytz.utc
    if hasattr(zone, "localize"):
        return zone.localize(value)
    return value.replace(tzinfo=zone)


def to_local(value: datetime, tz: Optional[tzinfo] = None) -> datetime:
    return value.astimezone(tz) if tz is not None else value


def calendar_date(value: datetime, tz: Optional[tzinfo] = None) -> date:
    """Calendar date of an instant as seen in ``tz``."""
    return to_local(value, tz).date()
