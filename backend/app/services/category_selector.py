"""Maps a business category to the record set that carries its revenue."""
from __future__ import annotations

import enum
import logging
from dataclasses import dataclass

from backend.app.models.business import BusinessCategory

logger = logging.getLogger(__name__)


class CustomerCountSource(str, enum.Enum):
    """Which quantity is reported as the business's customer count."""

    DISTINCT_IDENTIFIER = "distinct_identifier"
    ACTIVE_TENANTS = "active_tenants"
    ACTIVE_STUDENTS = "active_students"


class RecordScope(str, enum.Enum):
    """How revenue rows are tied to a business."""

    BUSINESS = "business"   # row carries business_id
    TENANTS = "tenants"     # via the business's tenants
    STUDENTS = "students"   # via the business's students


@dataclass(frozen=True)
class RevenueSource:
    collection: str
    amount_fields: tuple[str, ...]
    identifier_field: str | None
    customer_count: CustomerCountSource
    scope: RecordScope = RecordScope.BUSINESS
    paid_only: bool = False


SALES_SOURCE = RevenueSource(
    collection="sales",
    amount_fields=("total_amount", "amount", "paid_amount"),
    identifier_field="customer_phone",
    customer_count=CustomerCountSource.DISTINCT_IDENTIFIER,
)

RENT_SOURCE = RevenueSource(
    collection="rent_payments",
    amount_fields=("amount",),
    identifier_field=None,
    customer_count=CustomerCountSource.ACTIVE_TENANTS,
    scope=RecordScope.TENANTS,
    paid_only=True,
)

FEE_SOURCE = RevenueSource(
    collection="fee_payments",
    amount_fields=("amount",),
    identifier_field=None,
    customer_count=CustomerCountSource.ACTIVE_STUDENTS,
    scope=RecordScope.STUDENTS,
    paid_only=True,
)

BOOKING_SOURCE = RevenueSource(
    collection="bookings",
    amount_fields=("paid_amount",),
    identifier_field="guest_phone",
    customer_count=CustomerCountSource.DISTINCT_IDENTIFIER,
)

DEFAULT_SOURCE = SALES_SOURCE

_SOURCES: dict[BusinessCategory, RevenueSource] = {
    BusinessCategory.GENERAL_RETAIL: SALES_SOURCE,
    BusinessCategory.GROCERY_RETAIL: SALES_SOURCE,
    BusinessCategory.PROPERTY_RENTAL: RENT_SOURCE,
    BusinessCategory.EDUCATION: FEE_SOURCE,
    BusinessCategory.LODGING: BOOKING_SOURCE,
    BusinessCategory.SHORT_TERM_RENTAL: BOOKING_SOURCE,
}


def parse_category(value: BusinessCategory | str | None) -> BusinessCategory | None:
    """Return the category for a stored ``business_type`` value, or None."""
    if isinstance(value, BusinessCategory):
        return value
    if value is None:
        return None
    try:
        return BusinessCategory(value.strip().lower())
    except ValueError:
        return None


def select_revenue_source(category: BusinessCategory | str | None) -> RevenueSource:
    """Revenue source for *category*; unrecognized values get the retail mapping."""
    parsed = parse_category(category)
    if parsed is None:
        logger.debug("Unknown business category %r, using default revenue source", category)
        return DEFAULT_SOURCE
    return _SOURCES[parsed]
