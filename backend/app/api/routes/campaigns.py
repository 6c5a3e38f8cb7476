"""Campaign Routes — sponsor campaign CRUD.

Invariants:
    - Every endpoint needs a resolved caller
    - Only sponsors create; only the owning sponsor updates/deletes (others get 404)
    - Sponsors only ever see their own campaigns, in the list and in the detail
    - Listing without a sponsor to filter on returns an empty list, not an error

Design Decisions:
    - Ownership folded into the lookup query (Sponsor.user_id == caller.id), the
      same shape as ad slot find_owned: not-owned and missing are both 404
    - Non-sponsor callers may read a campaign by id or list by sponsorId: publishers
      review the campaigns that target their inventory
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.api.identity import get_current_user
from app.core.campaign_rules import check_date_range
from app.core.domain_types import CallerIdentity, CampaignId, CampaignStatus
from app.core.errors import (
    ErrorContext, ResourceNotFoundError, SponsorRequiredError, ValidationFailedError,
)
from app.infrastructure.database import get_db
from app.models.campaign import Campaign
from app.models.sponsor import Sponsor
from app.schemas.campaign import CampaignCreate, CampaignResponse, CampaignUpdate

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/campaigns", tags=["campaigns"])

# Columns that cannot be cleared by sending null
_REQUIRED_UPDATE_FIELDS = {
    "name", "budget", "start_date", "end_date", "status",
    "target_categories", "target_regions",
}


async def _load_campaign(
    db: AsyncSession, campaign_id: UUID, owner_user_id: str | None = None,
) -> Campaign | None:
    query = (
        select(Campaign)
        .where(Campaign.id == campaign_id)
        .options(selectinload(Campaign.sponsor))
        .execution_options(populate_existing=True)
    )
    if owner_user_id is not None:
        query = query.join(Campaign.sponsor).where(Sponsor.user_id == owner_user_id)
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def _get_owned_or_404(
    db: AsyncSession, campaign_id: UUID, caller: CallerIdentity,
) -> Campaign:
    campaign = await _load_campaign(db, CampaignId(campaign_id), caller.id)
    if not campaign:
        raise ResourceNotFoundError("Campaign", ErrorContext(user_id=caller.id))
    return campaign


@router.get("", response_model=list[CampaignResponse])
async def list_campaigns(
    sponsor_id: UUID | None = Query(None, alias="sponsorId"),
    campaign_status: CampaignStatus | None = Query(None, alias="status"),
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Campaigns of the calling sponsor (or of sponsorId), newest first."""
    filter_sponsor_id = caller.sponsor_id or sponsor_id
    if filter_sponsor_id is None:
        return []

    query = (
        select(Campaign)
        .where(Campaign.sponsor_id == filter_sponsor_id)
        .options(selectinload(Campaign.sponsor))
        .order_by(Campaign.created_at.desc())
    )
    if campaign_status:
        query = query.where(Campaign.status == campaign_status.value)

    result = await db.execute(query)
    return result.scalars().all()


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: UUID,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """One campaign. Sponsors can only open their own."""
    owner = caller.id if caller.is_sponsor else None
    campaign = await _load_campaign(db, CampaignId(campaign_id), owner)
    if not campaign:
        raise ResourceNotFoundError("Campaign", ErrorContext(user_id=caller.id))
    return campaign


@router.post(
    "", response_model=CampaignResponse, status_code=status.HTTP_201_CREATED,
)
async def create_campaign(
    body: CampaignCreate,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Start a campaign under the caller's sponsor profile."""
    if not caller.is_sponsor:
        raise SponsorRequiredError(
            ErrorContext(user_id=caller.id), action="create campaigns",
        )
    campaign = Campaign(
        sponsor_id=caller.sponsor_id,
        name=body.name,
        description=body.description,
        budget=body.budget,
        cpm_rate=body.cpm_rate,
        cpc_rate=body.cpc_rate,
        start_date=body.start_date,
        end_date=body.end_date,
        status=CampaignStatus.DRAFT.value,
        target_categories=body.target_categories,
        target_regions=body.target_regions,
    )
    db.add(campaign)
    await db.commit()
    logger.info(
        "Campaign created",
        extra={"sponsor_id": caller.sponsor_id, "user_id": caller.id},
    )
    return await _load_campaign(db, campaign.id)


@router.put("/{campaign_id}", response_model=CampaignResponse)
async def update_campaign(
    campaign_id: UUID,
    body: CampaignUpdate,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Partially update an owned campaign."""
    campaign = await _get_owned_or_404(db, campaign_id, caller)
    changes = {
        field: value
        for field, value in body.model_dump(exclude_unset=True).items()
        if not (value is None and field in _REQUIRED_UPDATE_FIELDS)
    }
    errors = check_date_range(
        changes.get("start_date", campaign.start_date),
        changes.get("end_date", campaign.end_date),
    )
    if errors:
        raise ValidationFailedError(errors, ErrorContext(user_id=caller.id))

    for field, value in changes.items():
        if isinstance(value, CampaignStatus):
            value = value.value
        setattr(campaign, field, value)
    await db.commit()
    return await _load_campaign(db, campaign_id)


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(
    campaign_id: UUID,
    caller: CallerIdentity = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
):
    """Delete an owned campaign."""
    campaign = await _get_owned_or_404(db, campaign_id, caller)
    await db.delete(campaign)
    await db.commit()
    logger.info("Campaign deleted", extra={"user_id": caller.id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
