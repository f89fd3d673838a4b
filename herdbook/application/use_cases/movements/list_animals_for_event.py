from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.movement_event import MovementAnimal


async def execute(uow: UnitOfWork, farm_id: UUID, movement_id: UUID) -> list[MovementAnimal]:
    """Animals of a movement as they were when it was recorded."""
    event = await uow.movements.get(farm_id, movement_id)
    if not event:
        raise NotFound("Movement not found")
    return await uow.movements.list_snapshots(farm_id, movement_id)
