from __future__ import annotations

from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.movement_event import MovementEvent


async def execute(uow: UnitOfWork, farm_id: UUID, movement_id: UUID) -> MovementEvent:
    event = await uow.movements.get(farm_id, movement_id)
    if not event:
        raise NotFound("Movement not found")
    return event
