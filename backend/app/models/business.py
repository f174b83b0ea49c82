from __future__ import annotations

import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.core.database import Base


class BusinessCategory(str, enum.Enum):
    """Business verticals. Values are the stored ``business_type`` strings."""

    GENERAL_RETAIL = "hardware"
    GROCERY_RETAIL = "supermarket"
    PROPERTY_RENTAL = "rentals"
    SHORT_TERM_RENTAL = "airbnb"
    LODGING = "hotel"
    EDUCATION = "school"


class PaymentStatus(str, enum.Enum):
    PAID = "paid"
    PENDING = "pending"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class Business(Base):
    """A tenant of the platform.

    ``business_type`` is kept as plain text rather than a database enum:
    rows written by older clients may carry values outside
    :class:`BusinessCategory`, and readers fall back to the retail mapping
    for those.
    """

    __tablename__ = "businesses"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id: Mapped[uuid.UUID | None] = mapped_column(Uuid, nullable=True)
    business_type: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_businesses_owner", "owner_id"),
    )
