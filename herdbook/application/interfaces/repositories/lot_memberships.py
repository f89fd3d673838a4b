from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from herdbook.domain.models.lot import LotMembership


class LotMembershipRepository(Protocol):
    async def add(self, membership: LotMembership) -> LotMembership: ...

    async def get_active(
        self, farm_id: UUID, lot_id: UUID, animal_id: UUID
    ) -> LotMembership | None: ...

    async def list_for_lot(
        self, farm_id: UUID, lot_id: UUID, *, include_history: bool = False
    ) -> list[LotMembership]: ...

    async def list_for_animal(
        self, farm_id: UUID, animal_id: UUID, *, include_history: bool = True
    ) -> list[LotMembership]: ...

    async def close(self, farm_id: UUID, membership_id: UUID, left_at: datetime) -> bool: ...

    async def close_open_lot_memberships(
        self, farm_id: UUID, animal_id: UUID, left_at: datetime
    ) -> list[UUID]:
        """Close the animal's active memberships in open lots; returns the lot ids."""
        ...

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...
