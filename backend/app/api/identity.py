"""Identity Resolver — turns trusted upstream headers into a CallerIdentity.

Invariants:
    - Missing user id header → UnauthenticatedError (401)
    - Sponsor profile wins over publisher profile when a user has both
    - A user with neither profile resolves with role None (authenticated, no marketplace side)

Design Decisions:
    - Session/cookie validation happens upstream; the headers are trusted as-is
    - Header names come from settings so the gateway contract is configurable
"""

import logging

from fastapi import Depends, Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import get_settings
from app.core.domain_types import (
    CallerIdentity, PublisherId, SponsorId, UserId, UserRole,
)
from app.core.errors import UnauthenticatedError
from app.infrastructure.database import get_db
from app.models.publisher import Publisher
from app.models.sponsor import Sponsor

logger = logging.getLogger(__name__)


async def find_profile(
    db: AsyncSession, user_id: str,
) -> Sponsor | Publisher | None:
    """Sponsor profile for user_id, else publisher profile, else None."""
    result = await db.execute(
        select(Sponsor).where(Sponsor.user_id == user_id),
    )
    sponsor = result.scalar_one_or_none()
    if sponsor:
        return sponsor
    result = await db.execute(
        select(Publisher).where(Publisher.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def resolve_identity(
    db: AsyncSession, user_id: str, email: str | None = None,
) -> CallerIdentity:
    profile = await find_profile(db, user_id)
    if isinstance(profile, Sponsor):
        return CallerIdentity(
            id=UserId(user_id), email=email, role=UserRole.SPONSOR,
            sponsor_id=SponsorId(profile.id),
        )
    if isinstance(profile, Publisher):
        return CallerIdentity(
            id=UserId(user_id), email=email, role=UserRole.PUBLISHER,
            publisher_id=PublisherId(profile.id),
        )
    return CallerIdentity(id=UserId(user_id), email=email)


async def get_current_user(
    request: Request, db: AsyncSession = Depends(get_db),
) -> CallerIdentity:
    """FastAPI dependency — the authenticated caller."""
    settings = get_settings()
    user_id = request.headers.get(settings.auth_user_header, "").strip()
    if not user_id:
        raise UnauthenticatedError()
    email = request.headers.get(settings.auth_email_header)
    return await resolve_identity(db, user_id, email)
