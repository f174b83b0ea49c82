"""Excel export of report tables using openpyxl."""
from __future__ import annotations

import io
from decimal import Decimal
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from backend.app.core.config import settings
from backend.app.services.export_i18n import t
from backend.app.services.reports import ReportTable

# ── Shared styling constants ────────────────────────────────────────────────

_HEADER_FONT = Font(name="Calibri", bold=True, color="FFFFFF", size=11)
_HEADER_FILL = PatternFill(start_color="1F4E79", end_color="1F4E79", fill_type="solid")
_TOTAL_FONT = Font(name="Calibri", bold=True, size=11)
_TOTAL_BORDER = Border(
    top=Side(style="thin"),
    bottom=Side(style="double"),
)
_CURRENCY_FMT = '#,##0.00'
_RIGHT = Alignment(horizontal="right")
_LEFT = Alignment(horizontal="left")

# Excel caps sheet titles at 31 characters
_MAX_SHEET_TITLE = 31


def _auto_width(ws: Any) -> None:
    """Auto-fit column widths based on content."""
    for col_idx in range(1, ws.max_column + 1):
        max_len = 0
        col_letter = get_column_letter(col_idx)
        for row in ws.iter_rows(min_col=col_idx, max_col=col_idx, values_only=False):
            cell = row[0]
            if cell.value is not None:
                max_len = max(max_len, len(str(cell.value)))
        ws.column_dimensions[col_letter].width = min(max_len + 4, 40)


def _write_header_row(ws: Any, row: int, values: list[str]) -> None:
    """Write a styled header row."""
    for col, val in enumerate(values, 1):
        cell = ws.cell(row=row, column=col, value=val)
        cell.font = _HEADER_FONT
        cell.fill = _HEADER_FILL
        cell.alignment = _RIGHT if col > 1 else _LEFT


def _write_title(ws: Any, title: str, subtitle: str) -> int:
    """Write report title and subtitle, return next available row."""
    ws.cell(row=1, column=1, value=title).font = Font(name="Calibri", bold=True, size=14)
    ws.cell(row=2, column=1, value=subtitle).font = Font(name="Calibri", size=10, italic=True)
    return 4


def _write_cell(ws: Any, row: int, col: int, value: Any) -> Any:
    if isinstance(value, Decimal):
        cell = ws.cell(row=row, column=col, value=float(value))
        cell.number_format = _CURRENCY_FMT
        cell.alignment = _RIGHT
        return cell
    cell = ws.cell(row=row, column=col, value=value)
    cell.alignment = _RIGHT if col > 1 else _LEFT
    return cell


def _to_workbook(ws: Any, wb: Workbook) -> io.BytesIO:
    """Finalize workbook and return as BytesIO."""
    _auto_width(ws)
    buf = io.BytesIO()
    wb.save(buf)
    buf.seek(0)
    return buf


# ── Report table ────────────────────────────────────────────────────────────


def export_report_excel(table: ReportTable, lang: str = "en") -> io.BytesIO:
    wb = Workbook()
    ws = wb.active
    ws.title = table.title[:_MAX_SHEET_TITLE]

    row = _write_title(
        ws, table.title, f"{t(lang, 'generated_on')} {table.generated_at.date().isoformat()}",
    )
    _write_header_row(ws, row, [
        f"{col.label} ({settings.CURRENCY_LABEL})" if col.money else col.label
        for col in table.columns
    ])
    row += 1

    for values in table.rows:
        for col, value in enumerate(values, 1):
            _write_cell(ws, row, col, value)
        row += 1

    money_idx = table.money_column
    if table.total_amount is not None and money_idx is not None:
        ws.cell(row=row, column=1, value=t(lang, "totals")).font = _TOTAL_FONT
        c = _write_cell(ws, row, money_idx + 1, table.total_amount)
        c.font = _TOTAL_FONT
        c.border = _TOTAL_BORDER

    return _to_workbook(ws, wb)
