from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdbook.domain.models.animal import Animal


class AnimalRepository(Protocol):
    async def add(self, animal: Animal) -> Animal: ...

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None: ...

    async def get_many(self, farm_id: UUID, animal_ids: list[UUID]) -> list[Animal]: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        status: str | None = None,
        species_id: str | None = None,
        sex: str | None = None,
        lot_id: UUID | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Animal]: ...

    async def count(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        species_id: str | None = None,
        sex: str | None = None,
        lot_id: UUID | None = None,
        search: str | None = None,
    ) -> int: ...

    async def update(
        self,
        farm_id: UUID,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None: ...

    async def delete(self, farm_id: UUID, animal_id: UUID, expected_version: int) -> bool: ...

    async def count_offspring(self, farm_id: UUID, animal_id: UUID) -> int: ...
