"""Reads the raw revenue rows the dashboard aggregator reduces."""
from __future__ import annotations

import time
from typing import Any
from uuid import UUID

from sqlalchemy import func, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.models.business import PaymentStatus
from backend.app.models.hospitality import Booking
from backend.app.models.rentals import RentPayment, Tenant
from backend.app.models.retail import Sale
from backend.app.models.school import FeePayment, Student
from backend.app.services.category_selector import (
    CustomerCountSource,
    RecordScope,
    RevenueSource,
)

_MODELS: dict[str, Any] = {
    "sales": Sale,
    "rent_payments": RentPayment,
    "fee_payments": FeePayment,
    "bookings": Booking,
}


class StatsFetchError(Exception):
    """The persistence service could not deliver the revenue rows."""


class StatsFetchTimeout(StatsFetchError):
    pass


class FetchDeadline:
    """Elapsed-time budget shared by the queries of one aggregation."""

    def __init__(self, timeout: float | None) -> None:
        self.timeout = timeout
        self._expires_at = time.monotonic() + timeout if timeout is not None else None

    def remaining(self) -> float | None:
        if self._expires_at is None:
            return None
        return self._expires_at - time.monotonic()

    def check(self, what: str) -> None:
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise StatsFetchTimeout(f"{what} exceeded {self.timeout:g}s")


def _apply_statement_timeout(db: Session, deadline: FetchDeadline) -> None:
    """Bound server-side query time on PostgreSQL for the current transaction."""
    remaining = deadline.remaining()
    if remaining is None or db.get_bind().dialect.name != "postgresql":
        return
    millis = max(int(remaining * 1000), 1)
    db.execute(text(f"SET LOCAL statement_timeout = {millis}"))


def _revenue_query(db: Session, business_id: UUID, source: RevenueSource) -> Any:
    model = _MODELS[source.collection]
    columns = [model.created_at]
    columns += [getattr(model, f) for f in source.amount_fields if hasattr(model, f)]
    if source.identifier_field and hasattr(model, source.identifier_field):
        columns.append(getattr(model, source.identifier_field))

    query = db.query(*columns)
    if source.scope == RecordScope.TENANTS:
        query = query.join(Tenant, model.tenant_id == Tenant.id).filter(
            Tenant.business_id == business_id
        )
    elif source.scope == RecordScope.STUDENTS:
        query = query.join(Student, model.student_id == Student.id).filter(
            Student.business_id == business_id
        )
    else:
        query = query.filter(model.business_id == business_id)

    if source.paid_only:
        query = query.filter(model.status == PaymentStatus.PAID.value)
    return query


def count_active_entities(db: Session, business_id: UUID, source: RevenueSource) -> int | None:
    """Active tenants or students of the business; None for identifier-counted sources."""
    if source.customer_count == CustomerCountSource.ACTIVE_TENANTS:
        entity = Tenant
    elif source.customer_count == CustomerCountSource.ACTIVE_STUDENTS:
        entity = Student
    else:
        return None
    count = (
        db.query(func.count(entity.id))
        .filter(entity.business_id == business_id, entity.is_active.is_(True))
        .scalar()
    )
    return int(count or 0)


def fetch_revenue_rows(
    db: Session,
    business_id: UUID,
    source: RevenueSource,
    timeout: float | None = None,
) -> tuple[list[dict[str, Any]], int | None]:
    """Return ``(rows, active_entity_count)`` for one business.

    Each row is a plain mapping keyed by column name: ``created_at``, the
    source's amount fields that exist on the table, and its identifier field.
    Any database error or an exhausted *timeout* raises StatsFetchError.
    """
    deadline = FetchDeadline(timeout)
    try:
        _apply_statement_timeout(db, deadline)
        rows = [row._asdict() for row in _revenue_query(db, business_id, source).all()]
        deadline.check(f"{source.collection} query")
        active = count_active_entities(db, business_id, source)
        deadline.check("active entity count")
    except SQLAlchemyError as exc:
        db.rollback()
        raise StatsFetchError(f"Failed to read {source.collection}: {exc}") from exc
    return rows, active
