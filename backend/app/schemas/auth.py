"""Auth Schemas — caller introspection responses."""

from uuid import UUID

from app.core.domain_types import UserRole
from app.schemas.ad_slot import CamelModel


class CallerResponse(CamelModel):
    """The identity resolved for the current request."""
    id: str
    email: str | None = None
    role: UserRole | None = None
    sponsor_id: UUID | None = None
    publisher_id: UUID | None = None


class RoleResponse(CamelModel):
    """Marketplace role of an arbitrary user id."""
    role: UserRole | None = None
    sponsor_id: UUID | None = None
    publisher_id: UUID | None = None
    name: str | None = None
