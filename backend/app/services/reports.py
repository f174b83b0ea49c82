"""Service layer for the printable business reports."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session, contains_eager, selectinload

from backend.app.models.business import Business, BusinessCategory
from backend.app.models.rentals import RentPayment, Tenant
from backend.app.models.retail import Product, Sale
from backend.app.models.school import FeePayment, Student
from backend.app.services.category_selector import parse_category
from backend.app.services.dashboard_stats import resolve_timezone
from backend.app.services.export_i18n import t
from backend.app.services.status import classify_stock, payment_badge, stock_badge

ZERO = Decimal("0")

RETAIL = frozenset({BusinessCategory.GENERAL_RETAIL, BusinessCategory.GROCERY_RETAIL})


class ReportNotAvailable(ValueError):
    pass


# ── Table model ──────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ReportColumn:
    key: str
    label: str
    money: bool = False


@dataclass
class ReportTable:
    """Header plus rows; every row has exactly one cell per column."""

    name: str
    title: str
    columns: list[ReportColumn]
    generated_at: datetime
    rows: list[list[Any]] = field(default_factory=list)
    total_amount: Decimal | None = None

    def add_row(self, values: list[Any]) -> None:
        if len(values) != len(self.columns):
            raise ValueError(
                f"{self.name} row has {len(values)} cells, expected {len(self.columns)}"
            )
        self.rows.append(list(values))

    @property
    def money_column(self) -> int | None:
        for idx, col in enumerate(self.columns):
            if col.money:
                return idx
        return None

    def as_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "title": self.title,
            "generated_at": self.generated_at.isoformat(),
            "columns": [{"key": c.key, "label": c.label} for c in self.columns],
            "rows": [[_json_cell(v) for v in row] for row in self.rows],
            "row_count": len(self.rows),
            "total_amount": str(self.total_amount) if self.total_amount is not None else None,
        }


def _json_cell(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value


def _local_date(moment: datetime | date | None, tz: tzinfo) -> str:
    if moment is None:
        return ""
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            moment = moment.replace(tzinfo=timezone.utc)
        return moment.astimezone(tz).date().isoformat()
    return moment.isoformat()


def _money(value: Any) -> Decimal:
    return Decimal(str(value)) if value is not None else ZERO


# ── Builders ─────────────────────────────────────────────────────────────────


def get_sales_report(
    db: Session, business_id: Any, lang: str = "en",
    now: datetime | None = None, tz: tzinfo | str | None = None,
) -> ReportTable:
    zone = resolve_timezone(tz)
    table = ReportTable(
        name="sales",
        title=t(lang, "sales_report"),
        columns=[
            ReportColumn("date", t(lang, "date")),
            ReportColumn("receipt_number", t(lang, "receipt_no")),
            ReportColumn("items", t(lang, "items")),
            ReportColumn("payment_method", t(lang, "payment")),
            ReportColumn("total_amount", t(lang, "total"), money=True),
        ],
        generated_at=now or datetime.now(timezone.utc),
    )
    sales = (
        db.query(Sale)
        .options(selectinload(Sale.items))
        .filter(Sale.business_id == business_id)
        .order_by(Sale.created_at.desc(), Sale.receipt_number)
        .all()
    )
    total = ZERO
    for sale in sales:
        amount = _money(sale.total_amount)
        table.add_row([
            _local_date(sale.created_at, zone),
            sale.receipt_number or "",
            sum(item.quantity for item in sale.items),
            sale.payment_method,
            amount,
        ])
        total += amount
    table.total_amount = total
    return table


def get_fee_report(
    db: Session, business_id: Any, lang: str = "en",
    now: datetime | None = None, tz: tzinfo | str | None = None,
) -> ReportTable:
    table = ReportTable(
        name="fees",
        title=t(lang, "fees_report"),
        columns=[
            ReportColumn("payment_date", t(lang, "date")),
            ReportColumn("student_name", t(lang, "student_name")),
            ReportColumn("admission_number", t(lang, "admission_no")),
            ReportColumn("term", t(lang, "term")),
            ReportColumn("status", t(lang, "status")),
            ReportColumn("amount", t(lang, "amount"), money=True),
        ],
        generated_at=now or datetime.now(timezone.utc),
    )
    payments = (
        db.query(FeePayment)
        .join(FeePayment.student)
        .options(contains_eager(FeePayment.student))
        .filter(Student.business_id == business_id)
        .order_by(FeePayment.created_at.desc(), FeePayment.payment_date.desc())
        .all()
    )
    total = ZERO
    for payment in payments:
        student = payment.student
        amount = _money(payment.amount)
        table.add_row([
            payment.payment_date.isoformat(),
            student.full_name,
            student.admission_number,
            payment.term or "",
            payment_badge(payment.status, lang).text,
            amount,
        ])
        total += amount
    table.total_amount = total
    return table


def get_rent_roll(
    db: Session, business_id: Any, lang: str = "en",
    now: datetime | None = None, tz: tzinfo | str | None = None,
) -> ReportTable:
    table = ReportTable(
        name="rent",
        title=t(lang, "rent_report"),
        columns=[
            ReportColumn("payment_date", t(lang, "date")),
            ReportColumn("tenant", t(lang, "tenant")),
            ReportColumn("unit_number", t(lang, "unit_number")),
            ReportColumn("status", t(lang, "status")),
            ReportColumn("amount", t(lang, "amount"), money=True),
        ],
        generated_at=now or datetime.now(timezone.utc),
    )
    payments = (
        db.query(RentPayment)
        .join(RentPayment.tenant)
        .options(contains_eager(RentPayment.tenant))
        .filter(Tenant.business_id == business_id)
        .order_by(RentPayment.created_at.desc(), RentPayment.payment_date.desc())
        .all()
    )
    total = ZERO
    for payment in payments:
        amount = _money(payment.amount)
        table.add_row([
            payment.payment_date.isoformat(),
            payment.tenant.name,
            payment.tenant.unit_number,
            payment_badge(payment.status, lang).text,
            amount,
        ])
        total += amount
    table.total_amount = total
    return table


def get_inventory_report(
    db: Session, business_id: Any, lang: str = "en",
    now: datetime | None = None, tz: tzinfo | str | None = None,
) -> ReportTable:
    table = ReportTable(
        name="inventory",
        title=t(lang, "inventory_report"),
        columns=[
            ReportColumn("name", t(lang, "product_name")),
            ReportColumn("category", t(lang, "category")),
            ReportColumn("stock_quantity", t(lang, "stock_quantity")),
            ReportColumn("unit", t(lang, "unit")),
            ReportColumn("status", t(lang, "status")),
            ReportColumn("selling_price", t(lang, "selling_price")),
        ],
        generated_at=now or datetime.now(timezone.utc),
    )
    products = (
        db.query(Product)
        .filter(Product.business_id == business_id)
        .order_by(Product.name.asc())
        .all()
    )
    for product in products:
        status = classify_stock(product.stock_quantity, product.min_stock_level)
        table.add_row([
            product.name,
            product.category or t(lang, "not_available"),
            product.stock_quantity,
            product.unit or "",
            stock_badge(status, lang).text,
            _money(product.selling_price),
        ])
    return table


# ── Catalog ──────────────────────────────────────────────────────────────────

ReportBuilder = Callable[..., ReportTable]


@dataclass(frozen=True)
class ReportDefinition:
    name: str
    categories: frozenset[BusinessCategory]
    builder: ReportBuilder | None = None

    @property
    def enabled(self) -> bool:
        return self.builder is not None


REPORT_CATALOG: tuple[ReportDefinition, ...] = (
    ReportDefinition("sales", RETAIL, get_sales_report),
    ReportDefinition("fees", frozenset({BusinessCategory.EDUCATION}), get_fee_report),
    ReportDefinition("rent", frozenset({BusinessCategory.PROPERTY_RENTAL}), get_rent_roll),
    ReportDefinition("revenue", frozenset(BusinessCategory)),
    ReportDefinition("customers", RETAIL),
    ReportDefinition("inventory", RETAIL, get_inventory_report),
)


def available_reports(category: BusinessCategory | str | None) -> list[ReportDefinition]:
    """Reports offered to a business category; unknown categories get the retail set."""
    parsed = parse_category(category) or BusinessCategory.GENERAL_RETAIL
    return [entry for entry in REPORT_CATALOG if parsed in entry.categories]


def catalog_entries(category: BusinessCategory | str | None, lang: str = "en") -> list[dict[str, object]]:
    return [
        {
            "name": entry.name,
            "title": t(lang, f"{entry.name}_report"),
            "description": t(lang, f"{entry.name}_report_desc"),
            "enabled": entry.enabled,
        }
        for entry in available_reports(category)
    ]


def build_report(
    db: Session,
    business: Business,
    report_name: str,
    lang: str = "en",
    now: datetime | None = None,
    tz: tzinfo | str | None = None,
) -> ReportTable:
    for entry in available_reports(business.business_type):
        if entry.name == report_name:
            if entry.builder is None:
                raise ReportNotAvailable(f"Report '{report_name}' is not available yet")
            return entry.builder(db, business.id, lang=lang, now=now, tz=tz)
    raise ReportNotAvailable(
        f"Report '{report_name}' is not offered for {business.business_type} businesses"
    )
