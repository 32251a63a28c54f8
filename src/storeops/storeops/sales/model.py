from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import PaymentMethod


@dataclass(frozen=True)
class TransactionRecord:
    """Domain entity: one sales transaction.

    ``attributed_to`` is the staff email the sale is credited to; None means
    the sale belongs to the shop as a whole ("common").
    """

    transaction_id: str
    payment_method: PaymentMethod
    amount: int
    occurred_at: datetime
    attributed_to: Optional[str] = None
    biz_date: Optional[date] = None
    memo: Optional[str] = None
