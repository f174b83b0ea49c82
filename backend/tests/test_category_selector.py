"""Tests for the business category → revenue source mapping."""
from __future__ import annotations

import pytest

from backend.app.models.business import BusinessCategory
from backend.app.services.category_selector import (
    BOOKING_SOURCE,
    DEFAULT_SOURCE,
    CustomerCountSource,
    RecordScope,
    parse_category,
    select_revenue_source,
)


@pytest.mark.parametrize(
    "category, collection, amount_fields, identifier, customer_count",
    [
        (BusinessCategory.GENERAL_RETAIL, "sales",
         ("total_amount", "amount", "paid_amount"), "customer_phone",
         CustomerCountSource.DISTINCT_IDENTIFIER),
        (BusinessCategory.GROCERY_RETAIL, "sales",
         ("total_amount", "amount", "paid_amount"), "customer_phone",
         CustomerCountSource.DISTINCT_IDENTIFIER),
        (BusinessCategory.PROPERTY_RENTAL, "rent_payments",
         ("amount",), None, CustomerCountSource.ACTIVE_TENANTS),
        (BusinessCategory.EDUCATION, "fee_payments",
         ("amount",), None, CustomerCountSource.ACTIVE_STUDENTS),
        (BusinessCategory.LODGING, "bookings",
         ("paid_amount",), "guest_phone", CustomerCountSource.DISTINCT_IDENTIFIER),
        (BusinessCategory.SHORT_TERM_RENTAL, "bookings",
         ("paid_amount",), "guest_phone", CustomerCountSource.DISTINCT_IDENTIFIER),
    ],
)
def test_each_category_maps_to_its_records(
    category: BusinessCategory,
    collection: str,
    amount_fields: tuple[str, ...],
    identifier: str | None,
    customer_count: CustomerCountSource,
) -> None:
    source = select_revenue_source(category)
    assert source.collection == collection
    assert source.amount_fields == amount_fields
    assert source.identifier_field == identifier
    assert source.customer_count == customer_count


def test_every_category_is_mapped() -> None:
    for category in BusinessCategory:
        assert select_revenue_source(category) is not None


def test_property_rental_counts_active_tenants_over_paid_rent() -> None:
    source = select_revenue_source("rentals")
    assert source.collection == "rent_payments"
    assert source.amount_fields == ("amount",)
    assert source.customer_count == CustomerCountSource.ACTIVE_TENANTS
    assert source.scope == RecordScope.TENANTS
    assert source.paid_only is True


def test_stored_strings_are_matched_case_insensitively() -> None:
    assert select_revenue_source(" Hotel ") is BOOKING_SOURCE
    assert parse_category("SCHOOL") == BusinessCategory.EDUCATION


@pytest.mark.parametrize("value", ["pharmacy", "", None, "property-rental"])
def test_unknown_category_falls_back_to_sales(value: str | None) -> None:
    assert parse_category(value) is None
    source = select_revenue_source(value)
    assert source is DEFAULT_SOURCE
    assert source.collection == "sales"
    assert source.customer_count == CustomerCountSource.DISTINCT_IDENTIFIER
