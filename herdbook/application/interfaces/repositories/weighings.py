from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from herdbook.domain.models.weighing import Weighing


class WeighingRepository(Protocol):
    async def add(self, weighing: Weighing) -> Weighing: ...

    async def get(self, farm_id: UUID, weighing_id: UUID) -> Weighing | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        animal_id: UUID | None = None,
        purpose: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Weighing]: ...

    async def count(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        purpose: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> int: ...

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[Weighing]: ...

    async def latest_for_animal(self, farm_id: UUID, animal_id: UUID) -> Weighing | None: ...

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...

    async def update(
        self, farm_id: UUID, weighing_id: UUID, data: dict, expected_version: int
    ) -> Weighing | None: ...

    async def delete(self, farm_id: UUID, weighing_id: UUID, expected_version: int) -> bool: ...
