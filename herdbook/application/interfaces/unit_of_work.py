from __future__ import annotations

from typing import Protocol

from herdbook.application.interfaces.repositories.animals import AnimalRepository
from herdbook.application.interfaces.repositories.lot_memberships import (
    LotMembershipRepository,
)
from herdbook.application.interfaces.repositories.movements import MovementRepository
from herdbook.application.interfaces.repositories.treatments import TreatmentRepository
from herdbook.application.interfaces.repositories.weighings import WeighingRepository
from herdbook.domain.ports.lots_repo import LotsRepo
from herdbook.domain.ports.product_catalog import ProductCatalog


class UnitOfWork(Protocol):
    animals: AnimalRepository
    movements: MovementRepository
    lots: LotsRepo
    lot_memberships: LotMembershipRepository
    weighings: WeighingRepository
    treatments: TreatmentRepository
    products: ProductCatalog

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
