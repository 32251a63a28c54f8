from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import ShiftRecord


class AttendanceRepository(Protocol):
    def list_in_range(
        self,
        *,
        start: datetime,
        end: datetime,
        user_email: Optional[str] = None,
    ) -> Sequence[ShiftRecord]:
        """Shifts with ``start <= start_time < end``, oldest first."""

        raise NotImplementedError
