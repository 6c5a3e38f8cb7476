"""Publisher ORM — the supply side; owns ad slots.

Invariants:
    - user_id is unique: one publisher profile per external identity
    - monthly_views is non-negative

Design Decisions:
    - cascade delete for ad_slots: a publisher's inventory goes with the publisher
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Publisher(Base):
    """Publisher profile linked to an external user."""
    __tablename__ = "publishers"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    monthly_views: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    ad_slots: Mapped[list["AdSlot"]] = relationship(
        "AdSlot", back_populates="publisher",
        cascade="all, delete-orphan", passive_deletes=True,
    )
