"""Error Hierarchy — typed, categorized exceptions for all marketplace failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope with a plain-text "error" field
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with MarketplaceError base: FastAPI global handler catches all
    - Failed ownership checks raise ResourceNotFoundError, never a 403:
      callers cannot tell "doesn't exist" from "not yours"
    - SlotUnavailableError keeps HTTP 400 (clients already branch on it)
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    FORBIDDEN = "forbidden"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    slot_id: str | None = None
    user_id: str | None = None


class MarketplaceError(Exception):
    """Base exception for all marketplace errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": self.message,
            "code": self.code,
            "category": self.category.value,
            "severity": self.severity.value,
            "timestamp": self.context.timestamp.isoformat(),
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class UnauthenticatedError(MarketplaceError):
    """No caller identity on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized - no valid session",
            "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class RoleRequiredError(MarketplaceError):
    """Caller lacks the marketplace role an operation needs."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "FORBIDDEN", ErrorCategory.FORBIDDEN,
            ErrorSeverity.WARNING, context, 403,
        )


class SponsorRequiredError(RoleRequiredError):
    """Only sponsors may book slots or run campaigns."""
    def __init__(
        self, context: ErrorContext | None = None, action: str = "book ad slots",
    ):
        super().__init__(f"Only sponsors can {action}", context)


class PublisherRequiredError(RoleRequiredError):
    """Only publishers may list inventory."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("Only publishers can create ad slots", context)


class ResourceNotFoundError(MarketplaceError):
    """Requested resource does not exist (or is not visible to the caller)."""
    def __init__(self, resource_type: str, context: ErrorContext | None = None):
        super().__init__(
            f"{resource_type} not found",
            "RESOURCE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.resource_type = resource_type


class SlotUnavailableError(MarketplaceError):
    """Booking attempted on a slot that is already booked."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Ad slot is no longer available",
            "SLOT_UNAVAILABLE", ErrorCategory.CONFLICT,
            ErrorSeverity.WARNING, context, 400,
        )


class ValidationFailedError(MarketplaceError):
    """Request body failed field-level business validation."""
    def __init__(self, field_errors: dict[str, str], context: ErrorContext | None = None):
        super().__init__(
            "Validation failed", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.field_errors = field_errors

    def to_response(self) -> dict:
        response = super().to_response()
        response["fieldErrors"] = self.field_errors
        return response


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(MarketplaceError):
    """Database operation failed. Detail is logged, never returned."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            "Storage operation failed",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 500,
        )
        self.operation = operation
        self.detail = f"Database {operation} failed: {message}"
