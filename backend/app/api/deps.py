from __future__ import annotations

from uuid import UUID

from fastapi import Depends, HTTPException, Query, Request, status
from sqlalchemy.orm import Session

from backend.app.core.config import settings
from backend.app.core.database import get_db
from backend.app.models.business import Business
from backend.app.services.export_i18n import normalize_language


def get_business(
    business_id: UUID,
    db: Session = Depends(get_db),
) -> Business:
    business = db.query(Business).filter(Business.id == business_id).first()
    if business is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Business not found"
        )
    return business


def get_language(
    request: Request,
    lang: str | None = Query(None),
) -> str:
    """Explicit ``?lang=`` wins over the negotiated ``Accept-Language``."""
    if lang:
        return normalize_language(lang, settings.DEFAULT_LANGUAGE)
    return getattr(request.state, "language", settings.DEFAULT_LANGUAGE)
