"""Ad Slot Routes — public browsing, publisher CRUD, and the booking endpoints.

Invariants:
    - List and detail are public; every write needs a resolved caller
    - Update/delete/unbook look slots up with find_owned: not-owned is a 404, never a 403
    - Create always starts a slot AVAILABLE; update cannot touch is_available
    - book/unbook delegate entirely to BookingController

Design Decisions:
    - get_slot_store and get_booking_controller are dependencies so tests can
      override the store (failing store, in-memory store) without touching the DB
    - Booking strategy read from settings per request: flipping BOOKING_STRATEGY
      needs no code change
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.identity import get_current_user
from app.config import get_settings
from app.core.domain_types import AdSlotId, AdSlotType, CallerIdentity
from app.core.errors import ErrorContext, PublisherRequiredError, ResourceNotFoundError
from app.infrastructure.database import get_db
from app.models.ad_slot import AdSlot
from app.schemas.ad_slot import (
    AdSlotCreate, AdSlotResponse, AdSlotUpdate, BookingResponse,
)
from app.services.ad_slot_store import SqlAlchemyAdSlotStore
from app.services.booking_controller import BookingController, BookingResult

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/ad-slots", tags=["ad-slots"])

# Columns that cannot be cleared by sending null
_REQUIRED_UPDATE_FIELDS = {"name", "type", "base_price"}


def get_slot_store(db: AsyncSession = Depends(get_db)) -> SqlAlchemyAdSlotStore:
    return SqlAlchemyAdSlotStore(db)


def get_booking_controller(
    store: SqlAlchemyAdSlotStore = Depends(get_slot_store),
) -> BookingController:
    return BookingController(store, get_settings().booking_strategy)


async def _load_slot(db: AsyncSession, slot_id: UUID) -> AdSlot | None:
    result = await db.execute(
        select(AdSlot)
        .where(AdSlot.id == slot_id)
        .options(selectinload(AdSlot.publisher))
        .execution_options(populate_existing=True)
    )
    return result.scalar_one_or_none()


async def _get_owned_or_404(
    store: SqlAlchemyAdSlotStore, slot_id: UUID, caller: CallerIdentity,
) -> AdSlot:
    slot = await store.find_owned(AdSlotId(slot_id), caller.id)
    if not slot:
        raise ResourceNotFoundError(
            "Ad slot", ErrorContext(slot_id=str(slot_id), user_id=caller.id),
        )
    return slot


def _booking_response(result: BookingResult) -> BookingResponse:
    return BookingResponse(
        success=result.success,
        message=result.message,
        ad_slot=AdSlotResponse.model_validate(result.ad_slot),
    )


@router.get("", response_model=list[AdSlotResponse])
async def list_ad_slots(
    publisher_id: UUID | None = Query(None, alias="publisherId"),
    slot_type: AdSlotType | None = Query(None, alias="type"),
    available: bool | None = Query(None),
    db: AsyncSession = Depends(get_db),
):
    """List ad slots, most expensive first."""
    query = (
        select(AdSlot)
        .options(selectinload(AdSlot.publisher))
        .order_by(AdSlot.base_price.desc())
    )
    if publisher_id:
        query = query.where(AdSlot.publisher_id == publisher_id)
    if slot_type:
        query = query.where(AdSlot.type == slot_type.value)
    if available:
        query = query.where(AdSlot.is_available.is_(True))

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{slot_id}", response_model=AdSlotResponse)
async def get_ad_slot(slot_id: UUID, db: AsyncSession = Depends(get_db)):
    """Get one ad slot with its publisher."""
    slot = await _load_slot(db, slot_id)
    if not slot:
        raise ResourceNotFoundError("Ad slot", ErrorContext(slot_id=str(slot_id)))
    return slot


@router.post(
    "", response_model=AdSlotResponse, status_code=status.HTTP_201_CREATED,
)
async def create_ad_slot(
    body: AdSlotCreate,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """List a new slot under the caller's publisher profile."""
    if not caller.is_publisher:
        raise PublisherRequiredError(ErrorContext(user_id=caller.id))
    slot = AdSlot(
        publisher_id=caller.publisher_id,
        name=body.name,
        description=body.description,
        type=body.type.value,
        base_price=body.base_price,
        position=body.position,
        width=body.width,
        height=body.height,
        is_available=True,
    )
    db.add(slot)
    await db.commit()
    logger.info(
        "Ad slot created",
        extra={"slot_id": slot.id, "publisher_id": caller.publisher_id},
    )
    return await _load_slot(db, slot.id)


@router.put("/{slot_id}", response_model=AdSlotResponse)
async def update_ad_slot(
    slot_id: UUID,
    body: AdSlotUpdate,
    caller: CallerIdentity = Depends(get_current_user),
    store: SqlAlchemyAdSlotStore = Depends(get_slot_store),
    db: AsyncSession = Depends(get_db),
):
    """Partially update an owned slot. Availability is not editable here."""
    slot = await _get_owned_or_404(store, slot_id, caller)
    for field, value in body.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_UPDATE_FIELDS:
            continue
        if isinstance(value, AdSlotType):
            value = value.value
        setattr(slot, field, value)
    await db.commit()
    return await _load_slot(db, slot_id)


@router.delete("/{slot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_ad_slot(
    slot_id: UUID,
    caller: CallerIdentity = Depends(get_current_user),
    store: SqlAlchemyAdSlotStore = Depends(get_slot_store),
    db: AsyncSession = Depends(get_db),
):
    """Delete an owned slot."""
    slot = await _get_owned_or_404(store, slot_id, caller)
    await db.delete(slot)
    await db.commit()
    logger.info("Ad slot deleted", extra={"slot_id": slot_id, "user_id": caller.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{slot_id}/book", response_model=BookingResponse)
async def book_ad_slot(
    slot_id: UUID,
    caller: CallerIdentity = Depends(get_current_user),
    controller: BookingController = Depends(get_booking_controller),
):
    """Book an available slot. Sponsors only."""
    result = await controller.book(AdSlotId(slot_id), caller)
    return _booking_response(result)


@router.post("/{slot_id}/unbook", response_model=BookingResponse)
async def unbook_ad_slot(
    slot_id: UUID,
    caller: CallerIdentity = Depends(get_current_user),
    controller: BookingController = Depends(get_booking_controller),
):
    """Make an owned slot available again."""
    result = await controller.unbook(AdSlotId(slot_id), caller)
    return _booking_response(result)
