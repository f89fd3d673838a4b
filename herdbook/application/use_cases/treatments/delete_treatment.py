from __future__ import annotations

from uuid import UUID

from herdbook.application.concurrency import apply_versioned_delete
from herdbook.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, farm_id: UUID, treatment_id: UUID, version: int) -> None:
    await apply_versioned_delete(
        uow.treatments, farm_id, treatment_id, version, entity="treatment"
    )
    await uow.commit()
