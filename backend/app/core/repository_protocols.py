"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - find_owned folds the ownership check into the lookup: it returns None for
      both a missing slot and one owned by another publisher
    - set_availability and compare_and_set_availability are separate methods so the
      booking strategy is visible at the call site, not hidden in a flag
"""

from typing import Protocol

from app.core.domain_types import AdSlotId, UserId


class AdSlotLike(Protocol):
    """Structural contract for slot objects handed back by a store."""
    id: AdSlotId
    is_available: bool


class AdSlotStore(Protocol):
    """Contract for ad-slot availability persistence — implemented by shell."""
    async def find_unique(self, slot_id: AdSlotId) -> AdSlotLike | None: ...
    async def find_owned(
        self, slot_id: AdSlotId, user_id: UserId,
    ) -> AdSlotLike | None: ...
    async def set_availability(
        self, slot_id: AdSlotId, is_available: bool,
    ) -> AdSlotLike | None: ...
    async def compare_and_set_availability(
        self, slot_id: AdSlotId, expected: bool, is_available: bool,
    ) -> AdSlotLike | None: ...
