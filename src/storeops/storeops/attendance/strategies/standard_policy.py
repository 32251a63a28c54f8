from __future__ import annotations

from datetime import datetime, tzinfo
from typing import Optional

from .base import DurationPolicy, ElapsedDecision, elapsed_hours


class StandardDurationPolicy(DurationPolicy):
    """Literal elapsed time (owner, cast and unknown roles)."""

    def elapsed(self, *, start: datetime, end: datetime, tz: Optional[tzinfo] = None) -> ElapsedDecision:
        return ElapsedDecision(hours=elapsed_hours(start, end))
