"""Sponsor ORM — the demand side; books ad slots and owns campaigns.

Design Decisions:
    - cascade delete for campaigns: a sponsor's campaigns go with the sponsor
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.db.base import Base


class Sponsor(Base):
    """Sponsor profile linked to an external user."""
    __tablename__ = "sponsors"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    campaigns: Mapped[list["Campaign"]] = relationship(
        "Campaign", back_populates="sponsor",
        cascade="all, delete-orphan", passive_deletes=True,
    )
