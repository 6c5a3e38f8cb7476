"""Campaign Rules — date-range checks shared by create and update.

Invariants:
    - check_date_range is PURE: returns field → message, empty dict means valid
    - Naive datetimes are read as UTC before comparing

Design Decisions:
    - Update re-checks against the stored dates: sending only endDate can still
      invert the range
"""

from datetime import datetime, timezone


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def check_date_range(start: datetime, end: datetime) -> dict[str, str]:
    if as_utc(end) < as_utc(start):
        return {"endDate": "End date must be on or after the start date"}
    return {}
