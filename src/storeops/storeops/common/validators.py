from __future__ import annotations

from typing import Any, Iterable

from ..core.exceptions import ValidationError


def require_collection(value: Any, field_name: str) -> Iterable:
    """Fail fast when a caller hands over no collection at all."""
    if value is None or isinstance(value, (str, bytes)):
        raise ValidationError(f"{field_name} must be a collection")
    try:
        iter(value)
    except TypeError as exc:
        raise ValidationError(f"{field_name} must be a collection") from exc
    return value
