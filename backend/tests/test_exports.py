"""Tests for report export endpoints (Excel + PDF)."""
from __future__ import annotations

import io
import re
from datetime import date, datetime, timezone
from decimal import Decimal

from fastapi.testclient import TestClient
from openpyxl import load_workbook
from sqlalchemy.orm import Session

from backend.app.models.business import Business
from backend.app.models.retail import Product
from backend.app.models.school import FeePayment, Student
from backend.app.services.export_excel import export_report_excel
from backend.app.services.export_pdf import export_filename, export_report_pdf
from backend.app.services.reports import ReportColumn, ReportTable

NOW = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


def _table() -> ReportTable:
    table = ReportTable(
        name="fees",
        title="Fee Collection Report",
        columns=[ReportColumn("student_name", "Student Name"),
                 ReportColumn("amount", "Amount", money=True)],
        generated_at=NOW,
    )
    table.add_row(["Wanjiru Kamau", Decimal("15000.00")])
    table.add_row(["Otieno Ouma", Decimal("2500.50")])
    table.total_amount = Decimal("17500.50")
    return table


# ── Service ──────────────────────────────────────────────────────────────


def test_export_filename() -> None:
    assert export_filename("sales", date(2024, 6, 15), "pdf") == "sales_report_2024-06-15.pdf"


def test_excel_export_contents() -> None:
    wb = load_workbook(export_report_excel(_table()))
    ws = wb.active
    assert ws.title == "Fee Collection Report"
    assert ws.cell(row=1, column=1).value == "Fee Collection Report"
    assert ws.cell(row=4, column=2).value == "Amount (KSh)"
    assert ws.cell(row=5, column=1).value == "Wanjiru Kamau"
    assert ws.cell(row=5, column=2).value == 15000.0
    assert ws.cell(row=7, column=1).value == "TOTALS"
    assert ws.cell(row=7, column=2).value == 17500.5


def test_pdf_export_is_pdf() -> None:
    buf = export_report_pdf(_table(), lang="sw")
    assert buf.read(5) == b"%PDF-"


# ── Endpoints ────────────────────────────────────────────────────────────


def test_sales_pdf_export(
    client: TestClient, hardware_shop: Business, product_a: Product,
) -> None:
    resp = client.get(f"/api/v1/businesses/{hardware_shop.id}/reports/sales/export/pdf")
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.content[:5] == b"%PDF-"
    assert re.search(
        r'filename="sales_report_\d{4}-\d{2}-\d{2}\.pdf"',
        resp.headers["content-disposition"],
    )


def test_inventory_excel_export(
    client: TestClient, hardware_shop: Business, product_a: Product,
) -> None:
    resp = client.get(f"/api/v1/businesses/{hardware_shop.id}/reports/inventory/export/excel")
    assert resp.status_code == 200
    assert "spreadsheetml" in resp.headers["content-type"]
    # XLSX files are ZIP archives starting with PK
    assert resp.content[:2] == b"PK"
    assert "inventory_report_" in resp.headers["content-disposition"]

    ws = load_workbook(io.BytesIO(resp.content)).active
    assert ws.cell(row=5, column=1).value == "Cement 50kg"
    assert ws.cell(row=5, column=5).value == "In Stock"


def test_fee_excel_export_in_swahili(
    client: TestClient, db: Session, school_business: Business, student: Student,
) -> None:
    db.add(FeePayment(
        student_id=student.id, business_id=school_business.id,
        amount=Decimal("15000.00"), payment_date=date(2024, 6, 3), status="paid",
    ))
    db.flush()

    resp = client.get(
        f"/api/v1/businesses/{school_business.id}/reports/fees/export/excel",
        params={"lang": "sw"},
    )
    assert resp.status_code == 200
    ws = load_workbook(io.BytesIO(resp.content)).active
    assert ws.cell(row=4, column=1).value == "Tarehe"
    assert ws.cell(row=5, column=5).value == "Imelipwa"


def test_disabled_report_cannot_be_exported(client: TestClient, hardware_shop: Business) -> None:
    resp = client.get(f"/api/v1/businesses/{hardware_shop.id}/reports/revenue/export/pdf")
    assert resp.status_code == 404
