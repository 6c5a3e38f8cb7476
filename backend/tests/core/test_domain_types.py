"""Domain Types — verifies rich type definitions and enum values.

Tests:
    - NewType wrappers exist and are callable
    - AdSlotType has exactly the five inventory formats
    - CallerIdentity role helpers follow the profile ids, not the role field
"""

from uuid import uuid4

import pytest

from app.core.domain_types import (
    AdSlotId, PublisherId, SponsorId, UserId,
    AdSlotType, BookingStrategy, CallerIdentity, SlotState, UserRole,
)


def test_identity_types_wrap_values():
    uid = uuid4()
    assert AdSlotId(uid) == uid
    assert PublisherId(uid) == uid
    assert SponsorId(uid) == uid
    assert UserId("user-1") == "user-1"


def test_ad_slot_type_has_five_formats():
    assert {t.value for t in AdSlotType} == {
        "DISPLAY", "VIDEO", "NATIVE", "NEWSLETTER", "PODCAST",
    }


def test_slot_state_has_two_states():
    assert set(SlotState) == {SlotState.AVAILABLE, SlotState.BOOKED}


def test_booking_strategy_parses_from_value():
    assert BookingStrategy("compare_and_swap") is BookingStrategy.COMPARE_AND_SWAP
    assert UserRole("sponsor") is UserRole.SPONSOR


def test_caller_identity_flags_follow_profile_ids():
    sponsor = CallerIdentity(id=UserId("u1"), sponsor_id=SponsorId(uuid4()))
    nobody = CallerIdentity(id=UserId("u2"))
    assert sponsor.is_sponsor and not sponsor.is_publisher
    assert not nobody.is_sponsor and not nobody.is_publisher


def test_caller_identity_is_immutable():
    caller = CallerIdentity(id=UserId("u1"))
    with pytest.raises(AttributeError):
        caller.sponsor_id = SponsorId(uuid4())
