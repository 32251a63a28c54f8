from __future__ import annotations

from enum import Enum
from typing import Optional


class Role(str, Enum):
    """Staff role stored in user_roles.role."""

    OWNER = "owner"
    CAST = "cast"
    DRIVER = "driver"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "Role":
        """Map a raw role value to a Role; anything unrecognised is UNKNOWN."""
        if isinstance(value, Role):
            return value
        if not value:
            return cls.UNKNOWN
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.UNKNOWN


class PaymentMethod(str, Enum):
    """Payment method recorded on a sales transaction."""

    CASH = "cash"
    PAYPAY_CREDIT = "paypay_credit"
    TSUKE = "tsuke"

    @property
    def label(self) -> str:
        return PAYMENT_METHOD_LABELS[self]


PAYMENT_METHOD_LABELS = {
    PaymentMethod.CASH: "現金",
    PaymentMethod.PAYPAY_CREDIT: "PayPay / クレジット",
    PaymentMethod.TSUKE: "ツケ",
}
