"""Ad Slot Store — SQLAlchemy implementation of the AdSlotStore boundary protocol.

Invariants:
    - find_owned is ONE query with both predicates (slot id, Publisher.user_id)
    - Every write commits immediately; there is no transaction spanning a read and a write
    - compare_and_set_availability returns None when the guarded UPDATE matched no row
    - Returned slots are re-read with populate_existing so callers never see stale flags

Design Decisions:
    - UPDATE statements instead of attribute mutation: the write is a single
      statement the database applies atomically, which is what makes the
      compare-and-swap variant safe
    - SQLAlchemy errors propagate untouched; DatabaseSessionManager maps them to DatabaseError
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.core.domain_types import AdSlotId, UserId
from app.models.ad_slot import AdSlot
from app.models.publisher import Publisher

logger = logging.getLogger(__name__)


class SqlAlchemyAdSlotStore:
    """Availability reads and writes for ad slots."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_unique(self, slot_id: AdSlotId) -> AdSlot | None:
        result = await self.db.execute(
            select(AdSlot).where(AdSlot.id == slot_id),
        )
        return result.scalar_one_or_none()

    async def find_owned(
        self, slot_id: AdSlotId, user_id: UserId,
    ) -> AdSlot | None:
        """Slot if it exists AND its publisher belongs to user_id, else None."""
        result = await self.db.execute(
            select(AdSlot)
            .join(AdSlot.publisher)
            .where(AdSlot.id == slot_id)
            .where(Publisher.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def set_availability(
        self, slot_id: AdSlotId, is_available: bool,
    ) -> AdSlot | None:
        """Unconditional write — last writer wins."""
        await self.db.execute(
            update(AdSlot)
            .where(AdSlot.id == slot_id)
            .values(is_available=is_available)
        )
        await self.db.commit()
        return await self._reload(slot_id)

    async def compare_and_set_availability(
        self, slot_id: AdSlotId, expected: bool, is_available: bool,
    ) -> AdSlot | None:
        """Write only if the stored flag still equals expected."""
        result = await self.db.execute(
            update(AdSlot)
            .where(AdSlot.id == slot_id)
            .where(AdSlot.is_available.is_(expected))
            .values(is_available=is_available)
        )
        await self.db.commit()
        if result.rowcount == 0:
            logger.info(
                "Availability compare-and-set lost",
                extra={"slot_id": slot_id},
            )
            return None
        return await self._reload(slot_id)

    async def _reload(self, slot_id: AdSlotId) -> AdSlot | None:
        result = await self.db.execute(
            select(AdSlot)
            .where(AdSlot.id == slot_id)
            .options(selectinload(AdSlot.publisher))
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()
