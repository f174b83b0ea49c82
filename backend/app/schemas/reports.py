"""Pydantic response schemas for business reports."""
from __future__ import annotations

from pydantic import BaseModel


# ── Catalog ──────────────────────────────────────────────────────────────────

class ReportCatalogEntry(BaseModel):
    name: str
    title: str
    description: str
    enabled: bool


class ReportCatalogResponse(BaseModel):
    business_id: str
    business_type: str
    reports: list[ReportCatalogEntry]


# ── Report table ─────────────────────────────────────────────────────────────

class ReportColumnSchema(BaseModel):
    key: str
    label: str


class ReportTableResponse(BaseModel):
    name: str
    title: str
    generated_at: str
    columns: list[ReportColumnSchema]
    rows: list[list[str | int | None]]
    row_count: int
    total_amount: str | None
