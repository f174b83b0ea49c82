"""Tests for stock and payment status badges."""
from __future__ import annotations

import pytest

from backend.app.models.business import PaymentStatus
from backend.app.services.status import (
    StockStatus,
    classify_stock,
    payment_badge,
    stock_badge,
)


# ── Stock ────────────────────────────────────────────────────────────────────


def test_zero_quantity_is_out_of_stock() -> None:
    assert classify_stock(0, 10) == StockStatus.OUT_OF_STOCK


def test_quantity_below_minimum_is_low_stock() -> None:
    assert classify_stock(5, 10) == StockStatus.LOW_STOCK


def test_quantity_above_minimum_is_in_stock() -> None:
    assert classify_stock(50, 10) == StockStatus.IN_STOCK


def test_quantity_equal_to_minimum_is_low_stock() -> None:
    assert classify_stock(10, 10) == StockStatus.LOW_STOCK


def test_negative_quantity_is_out_of_stock() -> None:
    assert classify_stock(-3, 10) == StockStatus.OUT_OF_STOCK


def test_missing_minimum_means_only_zero_is_flagged() -> None:
    assert classify_stock(1, None) == StockStatus.IN_STOCK


@pytest.mark.parametrize(
    "status, text, variant",
    [
        (StockStatus.IN_STOCK, "In Stock", "success"),
        (StockStatus.LOW_STOCK, "Low Stock", "warning"),
        (StockStatus.OUT_OF_STOCK, "Out of Stock", "danger"),
    ],
)
def test_stock_badges(status: StockStatus, text: str, variant: str) -> None:
    badge = stock_badge(status)
    assert badge.text == text
    assert badge.variant == variant


def test_stock_badge_in_swahili() -> None:
    assert stock_badge(StockStatus.OUT_OF_STOCK, "sw").text == "Imeisha"


# ── Payment ──────────────────────────────────────────────────────────────────


@pytest.mark.parametrize(
    "status, text, variant",
    [
        (PaymentStatus.PAID, "Paid", "success"),
        ("pending", "Pending", "warning"),
        ("OVERDUE", "Overdue", "danger"),
        ("cancelled", "Cancelled", "default"),
    ],
)
def test_payment_badges(status: PaymentStatus | str, text: str, variant: str) -> None:
    badge = payment_badge(status)
    assert badge.text == text
    assert badge.variant == variant


def test_unknown_payment_status_is_title_cased_and_neutral() -> None:
    badge = payment_badge("partially_paid")
    assert badge.text == "Partially Paid"
    assert badge.variant == "default"


def test_payment_badge_in_swahili() -> None:
    assert payment_badge("paid", "sw").text == "Imelipwa"
