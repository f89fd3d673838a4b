from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from herdbook.domain.models.movement_event import MovementAnimal, MovementEvent


class MovementRepository(Protocol):
    """Append-only store of movement events; there is no update or delete."""

    async def add(
        self, event: MovementEvent, snapshots: list[MovementAnimal]
    ) -> MovementEvent: ...

    async def get(self, farm_id: UUID, movement_id: UUID) -> MovementEvent | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        type: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        sort_order: str = "desc",
    ) -> list[MovementEvent]: ...

    async def count(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> int: ...

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[MovementEvent]: ...

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...

    async def list_snapshots(self, farm_id: UUID, movement_id: UUID) -> list[MovementAnimal]: ...
