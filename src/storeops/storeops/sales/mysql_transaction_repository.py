from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from ..core.enums import PaymentMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_datetime, to_mysql_datetime
from .model import TransactionRecord
from .repository import TransactionRepository

logger = logging.getLogger(__name__)


def _row_to_record(r: Dict[str, Any]) -> Optional[TransactionRecord]:
    try:
        method = PaymentMethod(r.get("payment_method"))
    except ValueError:
        logger.warning("Skipping transaction %s: unknown payment method %r", r.get("id"), r.get("payment_method"))
        return None
    return TransactionRecord(
        transaction_id=str(r["id"]),
        payment_method=method,
        amount=int(r.get("amount") or 0),
        occurred_at=normalize_mysql_datetime(r["created_at"]),
        attributed_to=(r.get("attributed_to_email") or "").strip().lower() or None,
        biz_date=r.get("biz_date"),
        memo=r.get("memo"),
    )


class MySQLTransactionRepository(TransactionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_in_range(self, *, start: datetime, end: datetime) -> Sequence[TransactionRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, biz_date, payment_method, amount, memo, attributed_to_email, created_at
                FROM transactions
                WHERE created_at >= %s AND created_at < %s
                ORDER BY created_at ASC
                """,
                (to_mysql_datetime(start), to_mysql_datetime(end)),
            )
            rows = fetchall(cur)

        records: List[TransactionRecord] = []
        for r in rows:
            record = _row_to_record(r)
            if record is not None:
                records.append(record)
        return records
