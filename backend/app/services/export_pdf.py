"""PDF export of report tables using fpdf2."""
from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from typing import Any

from fpdf import FPDF

from backend.app.core.config import settings
from backend.app.services.export_i18n import t
from backend.app.services.reports import ReportTable


# ── Shared helpers ──────────────────────────────────────────────────────────

_COL_BG = (31, 78, 121)   # dark blue header
_LINE_H = 7
_FONT = "Helvetica"
_PAGE_W = 277  # A4 landscape minus default margins


def export_filename(report_name: str, today: date, ext: str) -> str:
    """``sales_report_2026-10-19.pdf`` style download name."""
    return f"{report_name}_report_{today.isoformat()}.{ext}"


def _new_pdf(title: str, subtitle: str) -> FPDF:
    """Create a landscape PDF with title and subtitle."""
    pdf = FPDF(orientation="L")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_font(_FONT, "B", 16)
    pdf.cell(0, 10, _safe_text(title), new_x="LMARGIN", new_y="NEXT")
    pdf.set_font(_FONT, "", 9)
    pdf.cell(0, 6, _safe_text(subtitle), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)
    return pdf


def _column_widths(count: int) -> list[float]:
    """First column gets a double share of the page width."""
    unit = _PAGE_W / (count + 1)
    return [unit * 2] + [unit] * (count - 1)


def _header_row(pdf: FPDF, headers: list[str], widths: list[float]) -> None:
    """Draw a colored header row."""
    pdf.set_fill_color(*_COL_BG)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font(_FONT, "B", 9)
    for i, (h, w) in enumerate(zip(headers, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(h), border=1, fill=True, align=align)
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(pdf: FPDF, values: list[str], widths: list[float], bold: bool = False) -> None:
    """Draw a data row."""
    pdf.set_font(_FONT, "B" if bold else "", 8)
    for i, (v, w) in enumerate(zip(values, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(v), border="B", align=align)
    pdf.ln()


def _fmt(value: Any) -> str:
    """Format a cell for display; money gets thousands separators."""
    if isinstance(value, Decimal):
        return f"{value:,.2f}"
    if value is None:
        return ""
    return str(value)


def _safe_text(text: str) -> str:
    """Replace non-latin-1 characters for the PDF built-in fonts."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    """Output PDF to BytesIO."""
    buf = io.BytesIO()
    pdf.output(buf)
    buf.seek(0)
    return buf


# ── Report table ────────────────────────────────────────────────────────────


def export_report_pdf(table: ReportTable, lang: str = "en") -> io.BytesIO:
    pdf = _new_pdf(
        table.title,
        f"{t(lang, 'generated_on')} {table.generated_at.date().isoformat()}",
    )
    widths = _column_widths(len(table.columns))
    headers = [
        f"{col.label} ({settings.CURRENCY_LABEL})" if col.money else col.label
        for col in table.columns
    ]
    _header_row(pdf, headers, widths)

    for row in table.rows:
        _data_row(pdf, [_fmt(v) for v in row], widths)

    money_idx = table.money_column
    if table.total_amount is not None and money_idx is not None:
        totals = [""] * len(table.columns)
        totals[0] = t(lang, "totals")
        totals[money_idx] = _fmt(table.total_amount)
        _data_row(pdf, totals, widths, bold=True)

    return _to_bytes(pdf)
