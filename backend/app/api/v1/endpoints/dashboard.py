from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfoNotFoundError

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from backend.app.api.deps import get_business
from backend.app.core.database import get_db
from backend.app.models.business import Business
from backend.app.schemas.dashboard import DashboardStatsResponse
from backend.app.services.dashboard_stats import (
    DashboardStatsBoard,
    StatsSummary,
    get_dashboard_stats,
    resolve_timezone,
)

router = APIRouter()

# One board per process; keys are client dashboard sessions.
_board = DashboardStatsBoard()


@router.get("/{business_id}/dashboard-stats", response_model=DashboardStatsResponse)
def dashboard_stats(
    response: Response,
    as_of: datetime | None = Query(None),
    tz: str | None = Query(None),
    x_dashboard_session: str | None = Header(None),
    business: Business = Depends(get_business),
    db: Session = Depends(get_db),
) -> dict[str, object]:
    """Revenue tiles for a business.

    Clients that switch businesses quickly send ``X-Dashboard-Session``; a
    response computed for a selection that has since been replaced carries
    ``X-Stats-Superseded: true`` and should be dropped.
    """
    try:
        zone = resolve_timezone(tz)
    except (ZoneInfoNotFoundError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Unknown timezone: {tz}",
        )

    def _load() -> StatsSummary:
        return get_dashboard_stats(db, business.id, business.business_type, now=as_of, tz=zone)

    if x_dashboard_session is None:
        return _load().as_dict()

    ticket, summary, accepted = _board.refresh(x_dashboard_session, str(business.id), _load)
    response.headers["X-Stats-Sequence"] = str(ticket)
    if not accepted:
        response.headers["X-Stats-Superseded"] = "true"
    return summary.as_dict()
