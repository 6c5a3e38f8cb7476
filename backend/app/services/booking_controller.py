"""Booking Controller — book and unbook ad slots on behalf of a caller.

Invariants:
    - is_available goes True → False only through book() by a sponsor
    - is_available goes False → True only through unbook() by the owning publisher
    - unbook() on an available slot succeeds and leaves it available
    - Unknown slot and not-owned slot both raise ResourceNotFoundError from unbook()

Design Decisions:
    - READ_THEN_WRITE (default) checks availability, then writes unconditionally
      in a second statement. Two concurrent bookers can both pass the check and
      both report success; the stored flag ends up False either way.
    - COMPARE_AND_SWAP writes with an UPDATE guarded on is_available = True, so
      of two concurrent bookers exactly one wins and the other gets
      SlotUnavailableError
    - Guards come from core/booking_rules.py; this class only sequences store calls
"""

import logging
from dataclasses import dataclass

from app.core.booking_rules import (
    BOOKED_MESSAGE,
    RELEASED_MESSAGE,
    BookingEvent,
    is_available_in,
    require_sponsor,
    slot_state,
    transition,
)
from app.core.domain_types import AdSlotId, BookingStrategy, CallerIdentity
from app.core.errors import ErrorContext, ResourceNotFoundError, SlotUnavailableError
from app.core.repository_protocols import AdSlotLike, AdSlotStore

logger = logging.getLogger(__name__)


@dataclass
class BookingResult:
    success: bool
    message: str
    ad_slot: AdSlotLike


class BookingController:
    """Owns the availability flag of ad slots."""

    def __init__(
        self,
        store: AdSlotStore,
        strategy: BookingStrategy = BookingStrategy.READ_THEN_WRITE,
    ):
        self.store = store
        self.strategy = strategy

    async def book(
        self, slot_id: AdSlotId, caller: CallerIdentity,
    ) -> BookingResult:
        """Mark an available slot as booked for the calling sponsor."""
        require_sponsor(caller)
        ctx = ErrorContext(slot_id=str(slot_id), user_id=caller.id)

        slot = await self.store.find_unique(slot_id)
        if slot is None:
            raise ResourceNotFoundError("Ad slot", ctx)
        transition(slot_state(slot.is_available), BookingEvent.BOOK, str(slot_id))

        if self.strategy is BookingStrategy.COMPARE_AND_SWAP:
            updated = await self.store.compare_and_set_availability(
                slot_id, expected=True, is_available=False,
            )
            if updated is None:
                raise SlotUnavailableError(ctx)
        else:
            updated = await self.store.set_availability(slot_id, False)
            if updated is None:
                raise ResourceNotFoundError("Ad slot", ctx)

        logger.info(
            "slot booked by sponsor",
            extra={
                "slot_id": slot_id,
                "sponsor_id": caller.sponsor_id,
                "strategy": self.strategy.value,
            },
        )
        return BookingResult(success=True, message=BOOKED_MESSAGE, ad_slot=updated)

    async def unbook(
        self, slot_id: AdSlotId, caller: CallerIdentity,
    ) -> BookingResult:
        """Release a slot back to available. Owner only."""
        ctx = ErrorContext(slot_id=str(slot_id), user_id=caller.id)

        slot = await self.store.find_owned(slot_id, caller.id)
        if slot is None:
            raise ResourceNotFoundError("Ad slot", ctx)
        next_state = transition(
            slot_state(slot.is_available), BookingEvent.UNBOOK, str(slot_id),
        )

        updated = await self.store.set_availability(
            slot_id, is_available_in(next_state),
        )
        if updated is None:
            raise ResourceNotFoundError("Ad slot", ctx)

        logger.info(
            "slot released by owner",
            extra={"slot_id": slot_id, "user_id": caller.id},
        )
        return BookingResult(success=True, message=RELEASED_MESSAGE, ad_slot=updated)
