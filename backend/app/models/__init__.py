"""ORM Models — SQLAlchemy declarative models for all marketplace entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Publisher is the aggregate root for AdSlot; Sponsor is the aggregate root for Campaign

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from app.models.publisher import Publisher  # noqa: F401
from app.models.sponsor import Sponsor  # noqa: F401
from app.models.ad_slot import AdSlot  # noqa: F401
from app.models.campaign import Campaign  # noqa: F401
