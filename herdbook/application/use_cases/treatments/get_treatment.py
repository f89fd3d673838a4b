from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.treatment import Treatment


async def execute(uow: UnitOfWork, farm_id: UUID, treatment_id: UUID) -> Treatment:
    treatment = await uow.treatments.get(farm_id, treatment_id)
    if not treatment:
        raise NotFound("Treatment not found")
    return treatment
