from __future__ import annotations

from datetime import date, tzinfo
from typing import Dict, Iterable, List, Optional

from ..common.datetime_utils import calendar_date
from ..core.enums import PaymentMethod
from ..reporting.folding import fold_by, group_by
from .model import TransactionRecord


def business_date(record: TransactionRecord, tz: Optional[tzinfo] = None) -> date:
    """The explicit business date, else the calendar date of the sale in ``tz``."""
    return record.biz_date or calendar_date(record.occurred_at, tz)


def group_transactions_by_date(
    records: Iterable[TransactionRecord],
    tz: Optional[tzinfo] = None,
) -> Dict[date, List[TransactionRecord]]:
    return group_by(
        records,
        lambda r: business_date(r, tz),
        sort_key=lambda r: r.occurred_at,
    )


def sum_by_payment_category(records: Iterable[TransactionRecord]) -> Dict[PaymentMethod, int]:
    """Amount per payment method; every method is present, zero by default."""
    return fold_by(
        records,
        lambda r: r.payment_method,
        initial=lambda _: 0,
        step=lambda total, r: total + r.amount,
        seed_keys=list(PaymentMethod),
    )


def sum_by_attribution(records: Iterable[TransactionRecord]) -> Dict[Optional[str], int]:
    """Amount per credited staff email; None collects the common sales."""
    return fold_by(
        records,
        lambda r: r.attributed_to or None,
        initial=lambda _: 0,
        step=lambda total, r: total + r.amount,
    )
