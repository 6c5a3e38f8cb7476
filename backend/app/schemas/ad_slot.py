"""Ad Slot Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - JSON keys are camelCase (basePrice, isAvailable); snake_case accepted on input
    - AdSlotCreate.base_price and AdSlotUpdate.base_price are strictly positive
    - AdSlotUpdate has no is_available field and rejects unknown keys: the
      availability flag moves only through book/unbook

Design Decisions:
    - from_attributes on responses: routes hand ORM rows straight to model_validate
    - Decimal prices serialize as strings: no float rounding on the wire
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.domain_types import AdSlotType


class CamelModel(BaseModel):
    """Base for all API schemas — camelCase aliases, ORM-friendly."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class PublisherSummary(CamelModel):
    """Publisher fields embedded in ad slot responses."""
    id: UUID
    name: str
    category: str | None = None
    monthly_views: int = 0


class AdSlotResponse(CamelModel):
    """Ad slot as returned by every ad-slot endpoint."""
    id: UUID
    publisher_id: UUID
    name: str
    description: str | None = None
    type: AdSlotType
    position: str | None = None
    width: int | None = None
    height: int | None = None
    base_price: Decimal
    is_available: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    publisher: PublisherSummary | None = None


class AdSlotCreate(CamelModel):
    """Ad slot creation — publisher comes from the caller, never the body."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    type: AdSlotType
    base_price: Decimal = Field(gt=0, max_digits=10, decimal_places=2)
    position: str | None = Field(None, max_length=100)
    width: int | None = Field(None, gt=0)
    height: int | None = Field(None, gt=0)


class AdSlotUpdate(CamelModel):
    """Partial ad slot update — only fields present in the body are applied."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    type: AdSlotType | None = None
    base_price: Decimal | None = Field(None, gt=0, max_digits=10, decimal_places=2)
    position: str | None = Field(None, max_length=100)
    width: int | None = Field(None, gt=0)
    height: int | None = Field(None, gt=0)


class BookingResponse(CamelModel):
    """Result of book/unbook."""
    success: bool
    message: str
    ad_slot: AdSlotResponse
