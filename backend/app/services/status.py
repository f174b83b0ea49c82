"""Stock and payment status labels shown as badges in reports."""
from __future__ import annotations

import enum
from dataclasses import dataclass

from backend.app.models.business import PaymentStatus
from backend.app.services.export_i18n import t


class StockStatus(str, enum.Enum):
    IN_STOCK = "in_stock"
    LOW_STOCK = "low_stock"
    OUT_OF_STOCK = "out_of_stock"


@dataclass(frozen=True)
class StatusBadge:
    text: str
    variant: str  # success | warning | danger | default


_STOCK_VARIANTS: dict[StockStatus, str] = {
    StockStatus.IN_STOCK: "success",
    StockStatus.LOW_STOCK: "warning",
    StockStatus.OUT_OF_STOCK: "danger",
}

_PAYMENT_VARIANTS: dict[PaymentStatus, str] = {
    PaymentStatus.PAID: "success",
    PaymentStatus.PENDING: "warning",
    PaymentStatus.OVERDUE: "danger",
    PaymentStatus.CANCELLED: "default",
}


def classify_stock(quantity: int, min_stock_level: int | None) -> StockStatus:
    if quantity <= 0:
        return StockStatus.OUT_OF_STOCK
    if quantity <= (min_stock_level or 0):
        return StockStatus.LOW_STOCK
    return StockStatus.IN_STOCK


def stock_badge(status: StockStatus, lang: str = "en") -> StatusBadge:
    return StatusBadge(t(lang, status.value), _STOCK_VARIANTS[status])


def payment_badge(status: PaymentStatus | str, lang: str = "en") -> StatusBadge:
    """Badge for a stored payment status.

    Values outside PaymentStatus (older rows use e.g. ``Paid`` or ``partial``)
    are matched case-insensitively, else shown title-cased with the neutral
    variant.
    """
    try:
        parsed = PaymentStatus(status.lower()) if isinstance(status, str) else status
    except ValueError:
        return StatusBadge(status.replace("_", " ").title(), "default")
    return StatusBadge(t(lang, f"payment_{parsed.value}"), _PAYMENT_VARIANTS[parsed])
