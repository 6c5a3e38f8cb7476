"""Campaign ORM — a sponsor's budgeted advertising push over a date range.

Invariants:
    - Always belongs to a Sponsor (sponsor_id FK, ON DELETE CASCADE)
    - budget is positive; spent starts at 0
    - status is one of CampaignStatus values, DRAFT on creation
    - end_date is not before start_date

Design Decisions:
    - target_categories/target_regions stored as JSON lists: no join tables for
      free-form tags, and the same column type works on PostgreSQL and SQLite
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String, Text, Numeric, DateTime, ForeignKey, CheckConstraint, JSON,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import CampaignStatus
from app.db.base import Base

_STATUS_VALUES = ", ".join(f"'{s.value}'" for s in CampaignStatus)


class Campaign(Base):
    """Campaign entity — owned by one sponsor."""
    __tablename__ = "campaigns"
    __table_args__ = (
        CheckConstraint("budget > 0", name="ck_campaigns_budget_positive"),
        CheckConstraint("end_date >= start_date", name="ck_campaigns_date_range"),
        CheckConstraint(f"status IN ({_STATUS_VALUES})", name="ck_campaigns_status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    sponsor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("sponsors.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    budget: Mapped[Decimal] = mapped_column(
        Numeric(12, 2, asdecimal=True), nullable=False,
    )
    spent: Mapped[Decimal] = mapped_column(
        Numeric(12, 2, asdecimal=True), nullable=False, default=Decimal("0"),
    )
    cpm_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=True,
    )
    cpc_rate: Mapped[Decimal | None] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=True,
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=CampaignStatus.DRAFT.value,
    )
    target_categories: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list,
    )
    target_regions: Mapped[list[str]] = mapped_column(
        JSON, nullable=False, default=list,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    sponsor: Mapped["Sponsor"] = relationship(
        "Sponsor", back_populates="campaigns", lazy="selectin",
    )
