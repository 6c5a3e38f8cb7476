"""AdSlot ORM — a unit of advertising inventory.

Invariants:
    - Always belongs to a Publisher (publisher_id FK, ON DELETE CASCADE)
    - base_price is positive, stored with 2 decimal places
    - is_available starts True; only the booking controller flips it
    - type is one of AdSlotType values

Design Decisions:
    - type stored as String(20) with enum values: portable across PostgreSQL and SQLite
    - publisher loaded with selectin: every response embeds the publisher summary,
      and async sessions cannot lazy-load on attribute access
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import (
    String, Text, Integer, Numeric, Boolean, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.dialects.postgresql import UUID

from app.core.domain_types import AdSlotType
from app.db.base import Base

_TYPE_VALUES = ", ".join(f"'{t.value}'" for t in AdSlotType)


class AdSlot(Base):
    """Ad slot entity — bookable inventory owned by a publisher."""
    __tablename__ = "ad_slots"
    __table_args__ = (
        CheckConstraint("base_price > 0", name="ck_ad_slots_base_price_positive"),
        CheckConstraint(f"type IN ({_TYPE_VALUES})", name="ck_ad_slots_type"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    publisher_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("publishers.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(
        String(20), nullable=False, default=AdSlotType.DISPLAY.value,
    )
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    width: Mapped[int | None] = mapped_column(Integer, nullable=True)
    height: Mapped[int | None] = mapped_column(Integer, nullable=True)
    base_price: Mapped[Decimal] = mapped_column(
        Numeric(10, 2, asdecimal=True), nullable=False,
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
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

    publisher: Mapped["Publisher"] = relationship(
        "Publisher", back_populates="ad_slots", lazy="selectin",
    )
