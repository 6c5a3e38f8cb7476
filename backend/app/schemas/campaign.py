"""Campaign Schemas — sponsor campaign bodies and responses.

Invariants:
    - budget > 0; cpmRate/cpcRate >= 0 when present
    - CampaignCreate rejects endDate before startDate
    - CampaignUpdate rejects unknown keys (spent, sponsorId are not client-editable)
"""

from datetime import datetime
from decimal import Decimal
from uuid import UUID

from pydantic import ConfigDict, Field, model_validator

from app.core.campaign_rules import check_date_range
from app.core.domain_types import CampaignStatus
from app.schemas.ad_slot import CamelModel


class SponsorSummary(CamelModel):
    id: UUID
    name: str


class CampaignResponse(CamelModel):
    id: UUID
    sponsor_id: UUID
    name: str
    description: str | None = None
    budget: Decimal
    spent: Decimal
    cpm_rate: Decimal | None = None
    cpc_rate: Decimal | None = None
    start_date: datetime
    end_date: datetime
    status: CampaignStatus
    target_categories: list[str] = []
    target_regions: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    sponsor: SponsorSummary | None = None


class CampaignCreate(CamelModel):
    """Campaign creation — the sponsor comes from the caller, never the body."""
    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    budget: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    cpm_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    cpc_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    start_date: datetime
    end_date: datetime
    target_categories: list[str] = Field(default_factory=list)
    target_regions: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_date_range(self) -> "CampaignCreate":
        errors = check_date_range(self.start_date, self.end_date)
        if errors:
            raise ValueError(errors["endDate"])
        return self


class CampaignUpdate(CamelModel):
    """Partial campaign update — only fields present in the body are applied."""
    model_config = ConfigDict(extra="forbid")

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=5000)
    budget: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    cpm_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    cpc_rate: Decimal | None = Field(None, ge=0, max_digits=10, decimal_places=2)
    start_date: datetime | None = None
    end_date: datetime | None = None
    status: CampaignStatus | None = None
    target_categories: list[str] | None = None
    target_regions: list[str] | None = None
