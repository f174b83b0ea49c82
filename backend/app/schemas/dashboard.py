"""Pydantic response schema for the dashboard statistics tiles."""
from __future__ import annotations

from pydantic import BaseModel


class DashboardStatsResponse(BaseModel):
    total_revenue: str
    monthly_revenue: str
    total_transactions: int
    monthly_transactions: int
    total_customers: int
    revenue_growth_percent: str
