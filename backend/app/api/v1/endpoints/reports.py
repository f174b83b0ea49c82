from __future__ import annotations

import logging
from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from backend.app.api.deps import get_business, get_language
from backend.app.core.database import get_db
from backend.app.models.business import Business
from backend.app.schemas.reports import ReportCatalogResponse, ReportTableResponse
from backend.app.services.dashboard_stats import resolve_timezone
from backend.app.services.export_excel import export_report_excel
from backend.app.services.export_pdf import export_filename, export_report_pdf
from backend.app.services.reports import (
    ReportNotAvailable,
    ReportTable,
    build_report,
    catalog_entries,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def _build(db: Session, business: Business, report_name: str, lang: str) -> ReportTable:
    try:
        return build_report(db, business, report_name, lang=lang)
    except ReportNotAvailable as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


# ── Catalog ───────────────────────────────────────────────────────────────


@router.get("/{business_id}/reports", response_model=ReportCatalogResponse)
def report_catalog(
    business: Business = Depends(get_business),
    lang: str = Depends(get_language),
) -> dict[str, object]:
    return {
        "business_id": str(business.id),
        "business_type": business.business_type,
        "reports": catalog_entries(business.business_type, lang),
    }


# ── Report table ──────────────────────────────────────────────────────────


@router.get("/{business_id}/reports/{report_name}", response_model=ReportTableResponse)
def report_table(
    report_name: str,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
) -> dict[str, object]:
    return _build(db, business, report_name, lang).as_dict()


# ── Export helpers ────────────────────────────────────────────────────────

_XLSX_MIME = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
_PDF_MIME = "application/pdf"


def _export_response(
    buf: object, media_type: str, filename: str,
) -> StreamingResponse:
    return StreamingResponse(
        buf,  # type: ignore[arg-type]
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


def _export_name(report_name: str, ext: str) -> str:
    today = datetime.now(resolve_timezone(None)).date()
    return export_filename(report_name, today, ext)


@router.get("/{business_id}/reports/{report_name}/export/pdf")
def report_export_pdf(
    report_name: str,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
) -> StreamingResponse:
    table = _build(db, business, report_name, lang)
    buf = export_report_pdf(table, lang=lang)
    logger.info("Exported %s report (pdf, %d rows) for business %s", report_name, len(table.rows), business.id)
    return _export_response(buf, _PDF_MIME, _export_name(report_name, "pdf"))


@router.get("/{business_id}/reports/{report_name}/export/excel")
def report_export_excel(
    report_name: str,
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
    lang: str = Depends(get_language),
) -> StreamingResponse:
    table = _build(db, business, report_name, lang)
    buf = export_report_excel(table, lang=lang)
    logger.info("Exported %s report (excel, %d rows) for business %s", report_name, len(table.rows), business.id)
    return _export_response(buf, _XLSX_MIME, _export_name(report_name, "xlsx"))
