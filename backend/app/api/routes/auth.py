"""Auth Routes — caller introspection for API clients.

Invariants:
    - /me requires a resolved caller; /role/{user_id} is public
    - Login is not served here: sessions are owned by the upstream session layer
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api.identity import find_profile, get_current_user
from app.core.domain_types import CallerIdentity, UserRole
from app.infrastructure.database import get_db
from app.models.sponsor import Sponsor
from app.schemas.auth import CallerResponse, RoleResponse

router = APIRouter(prefix="/api/v1/auth", tags=["auth"])


@router.get("/me", response_model=CallerResponse)
async def get_me(caller: CallerIdentity = Depends(get_current_user)):
    """Identity resolved for the current request."""
    return CallerResponse(
        id=caller.id,
        email=caller.email,
        role=caller.role,
        sponsor_id=caller.sponsor_id,
        publisher_id=caller.publisher_id,
    )


@router.get("/role/{user_id}", response_model=RoleResponse)
async def get_role(user_id: str, db: AsyncSession = Depends(get_db)):
    """Marketplace role of a user, from its sponsor/publisher profile."""
    profile = await find_profile(db, user_id)
    if profile is None:
        return RoleResponse(role=None)
    if isinstance(profile, Sponsor):
        return RoleResponse(
            role=UserRole.SPONSOR, sponsor_id=profile.id, name=profile.name,
        )
    return RoleResponse(
        role=UserRole.PUBLISHER, publisher_id=profile.id, name=profile.name,
    )
