from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.services.lifecycle import is_temporarily_out, ordered, project_status


@dataclass(slots=True)
class AnimalStatusView:
    animal_id: UUID
    status: str
    projected_status: str
    status_changed_at: date | None
    temporarily_out: bool
    movement_count: int
    last_movement_date: date | None = None
    last_movement_type: str | None = None


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> AnimalStatusView:
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound("Animal not found")
    history = ordered(await uow.movements.list_for_animal(farm_id, animal_id))
    last = history[-1] if history else None
    # Without movements the stored status is authoritative (it may have been set manually)
    projected = project_status(history).value if history else animal.status
    return AnimalStatusView(
        animal_id=animal.id,
        status=animal.status,
        projected_status=projected,
        status_changed_at=animal.status_changed_at,
        temporarily_out=is_temporarily_out(history),
        movement_count=len(history),
        last_movement_date=last.movement_date if last else None,
        last_movement_type=last.type if last else None,
    )
