from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.services.growth import GrowthRate, compute_growth


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> GrowthRate | None:
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    return compute_growth(await uow.weighings.list_for_animal(farm_id, animal_id))
