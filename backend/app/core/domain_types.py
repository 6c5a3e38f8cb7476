"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AdSlotId, PublisherId, SponsorId, CampaignId wrap UUIDs; UserId is the external identity string
    - AdSlotType holds the only valid inventory formats
    - CampaignStatus holds the only valid campaign lifecycle values
    - CallerIdentity is immutable once resolved for a request

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AdSlotId = NewType("AdSlotId", UUID)
PublisherId = NewType("PublisherId", UUID)
SponsorId = NewType("SponsorId", UUID)
CampaignId = NewType("CampaignId", UUID)
UserId = NewType("UserId", str)


# ─── Enums ───────────────────────────────────────────────────────

class AdSlotType(str, Enum):
    """Inventory formats a publisher can list."""
    DISPLAY = "DISPLAY"
    VIDEO = "VIDEO"
    NATIVE = "NATIVE"
    NEWSLETTER = "NEWSLETTER"
    PODCAST = "PODCAST"


class CampaignStatus(str, Enum):
    """Lifecycle of a sponsor campaign. New campaigns start as DRAFT."""
    DRAFT = "DRAFT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    COMPLETED = "COMPLETED"


class UserRole(str, Enum):
    """Marketplace side of a user — resolved from profile rows, never stored on the user."""
    SPONSOR = "sponsor"
    PUBLISHER = "publisher"


class SlotState(str, Enum):
    """Booking states — derived from AdSlot.is_available."""
    AVAILABLE = "available"
    BOOKED = "booked"


class BookingStrategy(str, Enum):
    """How book() persists the availability flip."""
    READ_THEN_WRITE = "read_then_write"
    COMPARE_AND_SWAP = "compare_and_swap"


# ─── Caller ──────────────────────────────────────────────────────

@dataclass(frozen=True)
class CallerIdentity:
    """Identity of the acting user, as supplied by the session layer."""
    id: UserId
    email: str | None = None
    role: UserRole | None = None
    sponsor_id: SponsorId | None = None
    publisher_id: PublisherId | None = None

    @property
    def is_sponsor(self) -> bool:
        return self.sponsor_id is not None

    @property
    def is_publisher(self) -> bool:
        return self.publisher_id is not None
