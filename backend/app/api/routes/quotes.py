"""Quote Routes — sponsors ask a publisher for a custom price on a slot.

Invariants:
    - Field problems → 400 with fieldErrors for every failing field
    - Unknown or malformed adSlotId → 404 "Ad slot not found"
    - Requests are logged only; nothing is persisted and no email is sent

Design Decisions:
    - Quote id derived from the clock (QR-<base36 millis>): a correlation handle
      for support, not a primary key
"""

import logging
import time
from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.errors import ErrorContext, ResourceNotFoundError, ValidationFailedError
from app.core.quote_rules import make_quote_id, validate_quote_request
from app.infrastructure.database import get_db
from app.models.ad_slot import AdSlot
from app.schemas.quote import QuoteRequest, QuoteResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/quotes", tags=["quotes"])


def _parse_slot_id(raw: str) -> UUID | None:
    try:
        return UUID(raw)
    except ValueError:
        return None


@router.post("/request", response_model=QuoteResponse)
async def request_quote(body: QuoteRequest, db: AsyncSession = Depends(get_db)):
    """Accept a quote request for an existing ad slot."""
    field_errors = validate_quote_request(
        body.email, body.company_name, body.ad_slot_id,
    )
    if field_errors:
        raise ValidationFailedError(field_errors)

    slot_id = _parse_slot_id(body.ad_slot_id)
    slot = None
    if slot_id is not None:
        result = await db.execute(select(AdSlot).where(AdSlot.id == slot_id))
        slot = result.scalar_one_or_none()
    if not slot:
        raise ResourceNotFoundError(
            "Ad slot", ErrorContext(slot_id=body.ad_slot_id),
        )

    quote_id = make_quote_id(int(time.time() * 1000))
    logger.info(
        f"Quote request received from {body.company_name.strip()} for '{slot.name}'",
        extra={
            "quote_id": quote_id,
            "slot_id": slot.id,
            "publisher_id": slot.publisher_id,
        },
    )
    return QuoteResponse(
        success=True,
        quote_id=quote_id,
        message=(
            f"Thanks for your interest! We've received your quote request for "
            f"\"{slot.name}\". A representative will contact you within 24-48 hours."
        ),
    )
