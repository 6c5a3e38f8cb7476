"""Quote Request Rules — field validation and quote id generation.

Invariants:
    - validate_quote_request is PURE: returns field → message, empty dict means valid
    - Quote ids are "QR-" + uppercase base36 of the epoch milliseconds

Design Decisions:
    - Field errors collected, not raised one at a time: the form shows all of them at once
"""

import re
import string

_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_BASE36 = string.digits + string.ascii_uppercase


def is_valid_email(email: str) -> bool:
    return bool(_EMAIL_RE.match(email))


def validate_quote_request(
    email: str | None, company_name: str | None, ad_slot_id: str | None,
) -> dict[str, str]:
    """Check required quote fields. Pure — no lookups."""
    errors: dict[str, str] = {}
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"
    if not company_name or not company_name.strip():
        errors["companyName"] = "Company name is required"
    if not ad_slot_id:
        errors["adSlotId"] = "Ad slot ID is required"
    return errors


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, rem = divmod(value, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def make_quote_id(epoch_ms: int) -> str:
    return f"QR-{to_base36(epoch_ms)}"
