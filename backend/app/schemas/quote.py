"""Quote Schemas — quote request body and confirmation.

Invariants:
    - QuoteRequest accepts missing required fields: quote_rules reports them as
      fieldErrors so the form can show every problem at once
"""

from pydantic import Field

from app.schemas.ad_slot import CamelModel


class QuoteRequest(CamelModel):
    """Sponsor-side request for a custom quote on an ad slot."""
    email: str | None = Field(None, max_length=320)
    company_name: str | None = Field(None, max_length=200)
    ad_slot_id: str | None = None
    phone: str | None = Field(None, max_length=50)
    budget: float | str | None = None
    timeline: str | None = Field(None, max_length=200)
    message: str | None = Field(None, max_length=5000)


class QuoteResponse(CamelModel):
    success: bool
    quote_id: str
    message: str
