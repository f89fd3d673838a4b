from __future__ import annotations

from uuid import UUID

from herdbook.application.concurrency import apply_versioned_delete
from herdbook.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, farm_id: UUID, weighing_id: UUID, version: int) -> None:
    # Growth figures are derived on read, so nothing else needs recomputing.
    await apply_versioned_delete(uow.weighings, farm_id, weighing_id, version, entity="weighing")
    await uow.commit()
