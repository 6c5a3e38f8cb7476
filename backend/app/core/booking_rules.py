"""Booking Rules — pure state machine and guards for ad-slot availability.

Invariants:
    - AVAILABLE --book--> BOOKED; BOOKED --unbook--> AVAILABLE; AVAILABLE --unbook--> AVAILABLE
    - BOOKED --book--> raises SlotUnavailableError (never a silent no-op)
    - Guards never touch storage; the shell runs them around its reads and writes

Design Decisions:
    - Role guard runs before the slot lookup: a non-sponsor gets 403 regardless of slot state
    - Transition table as a dict: every legal edge is listed, anything else is a conflict
"""

from enum import Enum

from app.core.domain_types import CallerIdentity, SlotState
from app.core.errors import ErrorContext, SlotUnavailableError, SponsorRequiredError


class BookingEvent(str, Enum):
    BOOK = "book"
    UNBOOK = "unbook"


_TRANSITIONS: dict[tuple[SlotState, BookingEvent], SlotState] = {
    (SlotState.AVAILABLE, BookingEvent.BOOK): SlotState.BOOKED,
    (SlotState.BOOKED, BookingEvent.UNBOOK): SlotState.AVAILABLE,
    (SlotState.AVAILABLE, BookingEvent.UNBOOK): SlotState.AVAILABLE,
}

BOOKED_MESSAGE = "Ad slot booked successfully!"
RELEASED_MESSAGE = "Ad slot is now available again"


def slot_state(is_available: bool) -> SlotState:
    return SlotState.AVAILABLE if is_available else SlotState.BOOKED


def is_available_in(state: SlotState) -> bool:
    return state is SlotState.AVAILABLE


def transition(state: SlotState, event: BookingEvent, slot_id: str | None = None) -> SlotState:
    """Next state for event, or SlotUnavailableError when the edge does not exist."""
    try:
        return _TRANSITIONS[(state, event)]
    except KeyError:
        raise SlotUnavailableError(ErrorContext(slot_id=slot_id)) from None


def require_sponsor(caller: CallerIdentity) -> None:
    """Only callers with a sponsor profile may book."""
    if not caller.is_sponsor:
        raise SponsorRequiredError(ErrorContext(user_id=caller.id))
