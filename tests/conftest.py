from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

import pytest
import pytz

from src.storeops.storeops.attendance.model import ShiftRecord
from src.storeops.storeops.core.enums import Role
from src.storeops.storeops.sales.model import TransactionRecord
from src.storeops.storeops.users.model import UserRole
from src.storeops.storeops.users.name_cache import NameCache
from src.storeops.storeops.users.resolver import NameResolver

JST = pytz.timezone("Asia/Tokyo")


def jst(*args) -> datetime:
    return JST.localize(datetime(*args))


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@dataclass
class InMemoryAttendance:
    records: List[ShiftRecord]
    last_args: Optional[dict] = None

    def list_in_range(self, *, start: datetime, end: datetime, user_email: Optional[str] = None) -> Sequence[ShiftRecord]:
        self.last_args = {"start": start, "end": end, "user_email": user_email}
        out = [r for r in self.records if start <= r.start_time < end]
        if user_email:
            out = [r for r in out if r.user_email == user_email]
        return sorted(out, key=lambda r: r.start_time)


@dataclass
class InMemoryTransactions:
    records: List[TransactionRecord]
    last_args: Optional[dict] = None

    def list_in_range(self, *, start: datetime, end: datetime) -> Sequence[TransactionRecord]:
        self.last_args = {"start": start, "end": end}
        return sorted((r for r in self.records if start <= r.occurred_at < end), key=lambda r: r.occurred_at)


@dataclass
class InMemoryUserRoles:
    users: List[UserRole]
    lookups: List[List[str]] = field(default_factory=list)
    fail: bool = False

    def list_all(self) -> Sequence[UserRole]:
        return list(self.users)

    def get_display_names(self, emails: Sequence[str]) -> Dict[str, str]:
        self.lookups.append(list(emails))
        if self.fail:
            raise ConnectionError("user_roles unavailable")
        wanted = set(emails)
        return {u.email: u.display_name for u in self.users if u.email in wanted}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def user_roles() -> InMemoryUserRoles:
    return InMemoryUserRoles(
        [
            UserRole(email="aki@example.com", display_name="Aki", role=Role.CAST),
            UserRole(email="ken@example.com", display_name="Ken", role=Role.DRIVER),
            UserRole(email="mio@example.com", display_name="Mio", role=Role.OWNER),
        ]
    )


@pytest.fixture
def names(user_roles, clock) -> NameResolver:
    return NameResolver(user_roles, NameCache(ttl_seconds=60, clock=clock))
