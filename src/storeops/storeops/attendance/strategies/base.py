from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional


@dataclass(frozen=True)
class ElapsedDecision:
    hours: float
    night_shift: bool = False


class DurationPolicy(ABC):
    """Strategy Pattern: encapsulate how raw elapsed time is derived for a role."""

    @abstractmethod
    def elapsed(self, *, start: datetime, end: datetime, tz: Optional[tzinfo] = None) -> ElapsedDecision:
        raise NotImplementedError


def elapsed_hours(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600
