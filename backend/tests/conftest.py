"""Shared test fixtures.

Tests run against an in-memory SQLite database.  Each test runs inside a
transaction that is rolled back after the test completes, so tests never
pollute each other.
"""

from __future__ import annotations

import os

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")

from datetime import date, datetime, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from backend.app.core.database import Base, get_db  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models import hospitality, rentals, retail, school  # noqa: E402,F401
from backend.app.models.business import Business, BusinessCategory  # noqa: E402
from backend.app.models.rentals import Tenant  # noqa: E402
from backend.app.models.retail import Product  # noqa: E402
from backend.app.models.school import Student  # noqa: E402

# One shared connection so every thread sees the same in-memory database.
engine = create_engine(
    "sqlite+pysqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
Base.metadata.create_all(engine)


# ─── DB session that rolls back after every test ──────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    """Yield a DB session inside a transaction; rolled back after the test."""
    connection = engine.connect()
    transaction = connection.begin()
    session = Session(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the transactional test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ─── Businesses ───────────────────────────────────────────────────────────────


def _business(db: Session, business_type: str, name: str) -> Business:
    b = Business(
        business_type=business_type,
        name=name,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )
    db.add(b)
    db.flush()
    return b


@pytest.fixture()
def hardware_shop(db: Session) -> Business:
    return _business(db, BusinessCategory.GENERAL_RETAIL.value, "Mwangi Hardware")


@pytest.fixture()
def school_business(db: Session) -> Business:
    return _business(db, BusinessCategory.EDUCATION.value, "Baraka Academy")


@pytest.fixture()
def rental_business(db: Session) -> Business:
    return _business(db, BusinessCategory.PROPERTY_RENTAL.value, "Kilimani Apartments")


@pytest.fixture()
def hotel_business(db: Session) -> Business:
    return _business(db, BusinessCategory.LODGING.value, "Lakeview Hotel")


# ─── Catalogue entities ───────────────────────────────────────────────────────


@pytest.fixture()
def product_a(db: Session, hardware_shop: Business) -> Product:
    p = Product(
        business_id=hardware_shop.id,
        name="Cement 50kg",
        sku="CEM-50",
        category="Building",
        buying_price=Decimal("650.00"),
        selling_price=Decimal("750.00"),
        stock_quantity=50,
        min_stock_level=10,
        unit="bag",
    )
    db.add(p)
    db.flush()
    return p


@pytest.fixture()
def tenant(db: Session, rental_business: Business) -> Tenant:
    t = Tenant(
        business_id=rental_business.id,
        name="Achieng Otieno",
        phone="0712000111",
        unit_number="A4",
        rent_amount=Decimal("25000.00"),
        lease_start=date(2024, 1, 1),
    )
    db.add(t)
    db.flush()
    return t


@pytest.fixture()
def student(db: Session, school_business: Business) -> Student:
    s = Student(
        business_id=school_business.id,
        admission_number="ADM-001",
        first_name="Wanjiru",
        last_name="Kamau",
        class_level="Grade 4",
        parent_phone="0722000333",
        fee_amount=Decimal("15000.00"),
    )
    db.add(s)
    db.flush()
    return s
