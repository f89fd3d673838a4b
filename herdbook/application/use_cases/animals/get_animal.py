from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.animal import Animal


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> Animal:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound("Animal not found")
    return animal
