from __future__ import annotations

from datetime import date
from typing import Protocol
from uuid import UUID

from herdbook.domain.models.treatment import Treatment


class TreatmentRepository(Protocol):
    async def add(self, treatment: Treatment) -> Treatment: ...

    async def get(self, farm_id: UUID, treatment_id: UUID) -> Treatment | None: ...

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        animal_id: UUID | None = None,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
        sort_order: str = "desc",
    ) -> list[Treatment]: ...

    async def count(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> int: ...

    async def list_for_animal(
        self, farm_id: UUID, animal_id: UUID, *, as_of: date | None = None
    ) -> list[Treatment]: ...

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int: ...

    async def update(
        self, farm_id: UUID, treatment_id: UUID, data: dict, expected_version: int
    ) -> Treatment | None: ...

    async def delete(self, farm_id: UUID, treatment_id: UUID, expected_version: int) -> bool: ...
