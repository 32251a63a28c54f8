from __future__ import annotations

from datetime import datetime
from typing import Protocol, Sequence

from .model import TransactionRecord


class TransactionRepository(Protocol):
    def list_in_range(self, *, start: datetime, end: datetime) -> Sequence[TransactionRecord]:
        """Transactions with ``start <= created_at < end``, oldest first."""

        raise NotImplementedError
