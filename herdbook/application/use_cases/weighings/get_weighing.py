from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.weighing import Weighing


async def execute(uow: UnitOfWork, farm_id: UUID, weighing_id: UUID) -> Weighing:
    weighing = await uow.weighings.get(farm_id, weighing_id)
    if not weighing:
        raise NotFound("Weighing not found")
    return weighing
