from __future__ import annotations

from abc import ABC, abstractmethod
from uuid import UUID

from herdbook.domain.models.lot import Lot


class LotsRepo(ABC):
    @abstractmethod
    async def add(self, lot: Lot) -> Lot: ...

    @abstractmethod
    async def get(self, farm_id: UUID, lot_id: UUID) -> Lot | None: ...

    @abstractmethod
    async def find_by_name(self, farm_id: UUID, name: str) -> Lot | None: ...

    @abstractmethod
    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        type: str | None = None,
        status: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Lot]: ...

    @abstractmethod
    async def count(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        status: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> int: ...

    @abstractmethod
    async def update(
        self, farm_id: UUID, lot_id: UUID, data: dict, expected_version: int
    ) -> Lot | None: ...
