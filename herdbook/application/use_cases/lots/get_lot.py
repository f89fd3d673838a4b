from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.lot import Lot


async def execute(uow: UnitOfWork, farm_id: UUID, lot_id: UUID) -> Lot:
    lot = await uow.lots.get(farm_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    return lot
