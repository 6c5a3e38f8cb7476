"""Booking Controller — book/unbook sequencing against in-memory and SQL stores.

Tests cover:
    - book flips an available slot, rejects a booked one, rejects non-sponsors
    - unbook is owner-only and idempotent on available slots
    - Concurrent bookings: read_then_write lets both win, compare_and_swap exactly one
    - SqlAlchemyAdSlotStore: find_owned predicate, guarded UPDATE

Design Decisions:
    - Concurrency is exercised with an in-memory store that yields after each read:
      deterministic interleaving, no threads, no timing
"""

import asyncio
import logging
from uuid import uuid4

import pytest

from app.core.domain_types import (
    BookingStrategy, CallerIdentity, PublisherId, SponsorId, UserId, UserRole,
)
from app.core.errors import (
    ResourceNotFoundError, SlotUnavailableError, SponsorRequiredError,
)
from app.services.ad_slot_store import SqlAlchemyAdSlotStore
from app.services.booking_controller import BookingController
from tests.services.fake_store import InMemoryAdSlotStore, make_slot


def _sponsor(user_id="sponsor-user-1") -> CallerIdentity:
    return CallerIdentity(
        id=UserId(user_id), role=UserRole.SPONSOR, sponsor_id=SponsorId(uuid4()),
    )


def _owner(user_id="publisher-user-1") -> CallerIdentity:
    return CallerIdentity(
        id=UserId(user_id), role=UserRole.PUBLISHER,
        publisher_id=PublisherId(uuid4()),
    )


# ─── book ────────────────────────────────────────────────────────

async def test_book_marks_available_slot_unavailable():
    slot = make_slot()
    store = InMemoryAdSlotStore(slot)
    result = await BookingController(store).book(slot.id, _sponsor())
    assert result.success is True
    assert result.message == "Ad slot booked successfully!"
    assert result.ad_slot.is_available is False
    assert store.slots[slot.id].is_available is False


async def test_book_twice_second_call_conflicts():
    slot = make_slot()
    controller = BookingController(InMemoryAdSlotStore(slot))
    await controller.book(slot.id, _sponsor("sponsor-user-1"))
    with pytest.raises(SlotUnavailableError) as exc_info:
        await controller.book(slot.id, _sponsor("sponsor-user-2"))
    assert exc_info.value.message == "Ad slot is no longer available"


async def test_book_missing_slot_raises_not_found():
    controller = BookingController(InMemoryAdSlotStore())
    with pytest.raises(ResourceNotFoundError):
        await controller.book(uuid4(), _sponsor())


@pytest.mark.parametrize("is_available", [True, False])
async def test_book_by_non_sponsor_is_forbidden_regardless_of_state(is_available):
    slot = make_slot(is_available=is_available)
    store = InMemoryAdSlotStore(slot)
    with pytest.raises(SponsorRequiredError):
        await BookingController(store).book(slot.id, _owner())
    assert store.writes == []


async def test_book_without_any_profile_is_forbidden():
    slot = make_slot()
    caller = CallerIdentity(id=UserId("nobody"))
    with pytest.raises(SponsorRequiredError):
        await BookingController(InMemoryAdSlotStore(slot)).book(slot.id, caller)


async def test_book_logs_sponsor_and_slot(caplog):
    slot = make_slot()
    caller = _sponsor()
    with caplog.at_level(logging.INFO, logger="app.services.booking_controller"):
        await BookingController(InMemoryAdSlotStore(slot)).book(slot.id, caller)
    record = next(r for r in caplog.records if r.message == "slot booked by sponsor")
    assert record.slot_id == slot.id
    assert record.sponsor_id == caller.sponsor_id


# ─── unbook ──────────────────────────────────────────────────────

async def test_unbook_by_owner_makes_slot_available():
    slot = make_slot(is_available=False)
    store = InMemoryAdSlotStore(slot)
    result = await BookingController(store).unbook(slot.id, _owner())
    assert result.success is True
    assert result.message == "Ad slot is now available again"
    assert store.slots[slot.id].is_available is True


async def test_unbook_by_non_owner_raises_not_found():
    slot = make_slot(is_available=False)
    store = InMemoryAdSlotStore(slot)
    with pytest.raises(ResourceNotFoundError):
        await BookingController(store).unbook(slot.id, _owner("publisher-user-2"))
    assert store.slots[slot.id].is_available is False


async def test_unbook_missing_and_not_owned_are_indistinguishable():
    slot = make_slot(is_available=False)
    controller = BookingController(InMemoryAdSlotStore(slot))
    with pytest.raises(ResourceNotFoundError) as missing:
        await controller.unbook(uuid4(), _owner())
    with pytest.raises(ResourceNotFoundError) as not_owned:
        await controller.unbook(slot.id, _owner("publisher-user-2"))
    assert missing.value.to_response()["error"] == not_owned.value.to_response()["error"]


async def test_unbook_available_slot_is_idempotent():
    slot = make_slot(is_available=True)
    store = InMemoryAdSlotStore(slot)
    result = await BookingController(store).unbook(slot.id, _owner())
    assert result.success is True
    assert result.ad_slot.is_available is True


async def test_book_unbook_book_cycles():
    slot = make_slot()
    controller = BookingController(InMemoryAdSlotStore(slot))
    await controller.book(slot.id, _sponsor())
    await controller.unbook(slot.id, _owner())
    result = await controller.book(slot.id, _sponsor("sponsor-user-2"))
    assert result.ad_slot.is_available is False


# ─── Concurrent bookings ────────────────────────────────────────

async def test_read_then_write_lets_both_concurrent_bookings_succeed():
    """Both callers pass the availability check before either writes."""
    slot = make_slot()
    store = InMemoryAdSlotStore(slot, yield_after_read=True)
    controller = BookingController(store, BookingStrategy.READ_THEN_WRITE)

    results = await asyncio.gather(
        controller.book(slot.id, _sponsor("sponsor-user-1")),
        controller.book(slot.id, _sponsor("sponsor-user-2")),
        return_exceptions=True,
    )

    assert all(not isinstance(r, Exception) for r in results)
    assert [r.success for r in results] == [True, True]
    assert store.writes == [(slot.id, False), (slot.id, False)]
    assert store.slots[slot.id].is_available is False


async def test_compare_and_swap_lets_exactly_one_concurrent_booking_win():
    slot = make_slot()
    store = InMemoryAdSlotStore(slot, yield_after_read=True)
    controller = BookingController(store, BookingStrategy.COMPARE_AND_SWAP)

    results = await asyncio.gather(
        controller.book(slot.id, _sponsor("sponsor-user-1")),
        controller.book(slot.id, _sponsor("sponsor-user-2")),
        return_exceptions=True,
    )

    wins = [r for r in results if not isinstance(r, Exception)]
    losses = [r for r in results if isinstance(r, SlotUnavailableError)]
    assert len(wins) == 1
    assert len(losses) == 1
    assert store.writes == [(slot.id, False)]


# ─── SqlAlchemyAdSlotStore ──────────────────────────────────────

async def test_sql_store_find_owned_requires_matching_publisher_user(
    test_db, ad_slot, publisher, other_publisher,
):
    store = SqlAlchemyAdSlotStore(test_db)
    assert (await store.find_owned(ad_slot.id, publisher.user_id)).id == ad_slot.id
    assert await store.find_owned(ad_slot.id, other_publisher.user_id) is None
    assert await store.find_owned(uuid4(), publisher.user_id) is None


async def test_sql_store_set_availability_returns_fresh_row(test_db, ad_slot):
    store = SqlAlchemyAdSlotStore(test_db)
    updated = await store.set_availability(ad_slot.id, False)
    assert updated.is_available is False
    assert updated.publisher.name == "Tech Blog"


async def test_sql_store_set_availability_on_missing_slot_returns_none(test_db):
    store = SqlAlchemyAdSlotStore(test_db)
    assert await store.set_availability(uuid4(), False) is None


async def test_sql_store_compare_and_set_rejects_stale_expectation(test_db, ad_slot):
    store = SqlAlchemyAdSlotStore(test_db)
    first = await store.compare_and_set_availability(ad_slot.id, True, False)
    second = await store.compare_and_set_availability(ad_slot.id, True, False)
    assert first is not None
    assert first.is_available is False
    assert second is None


async def test_controller_with_sql_store_books_and_releases(
    test_db, ad_slot, sponsor, publisher,
):
    controller = BookingController(SqlAlchemyAdSlotStore(test_db))
    sponsor_caller = CallerIdentity(
        id=UserId(sponsor.user_id), role=UserRole.SPONSOR,
        sponsor_id=SponsorId(sponsor.id),
    )
    owner_caller = CallerIdentity(
        id=UserId(publisher.user_id), role=UserRole.PUBLISHER,
        publisher_id=PublisherId(publisher.id),
    )

    booked = await controller.book(ad_slot.id, sponsor_caller)
    assert booked.ad_slot.is_available is False
    with pytest.raises(SlotUnavailableError):
        await controller.book(ad_slot.id, sponsor_caller)
    released = await controller.unbook(ad_slot.id, owner_caller)
    assert released.ad_slot.is_available is True
