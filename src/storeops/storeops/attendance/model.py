from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: one clock-in to clock-out attendance period."""

    shift_id: str
    user_email: str
    start_time: datetime
    end_time: Optional[datetime] = None
    role: Role = Role.UNKNOWN
    companion: bool = False

    @property
    def is_open(self) -> bool:
        return self.end_time is None


@dataclass(frozen=True)
class AggregateResult:
    """Per-user totals over a reporting window."""

    user_email: str
    total_hours: float
    shift_count: int
    companion_shift_count: int


@dataclass(frozen=True)
class NegativeDurationAnomaly:
    """A shift whose clock-out precedes its clock-in."""

    shift_id: Optional[str]
    start_time: datetime
    end_time: datetime
    elapsed_hours: float
