from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.lot import LotMembership


@dataclass(slots=True)
class LotAnimal:
    membership: LotMembership
    animal: Animal


async def execute(
    uow: UnitOfWork, farm_id: UUID, lot_id: UUID, *, include_history: bool = False
) -> list[LotAnimal]:
    if not await uow.lots.get(farm_id, lot_id):
        raise NotFound("Lot not found")
    memberships = await uow.lot_memberships.list_for_lot(
        farm_id, lot_id, include_history=include_history
    )
    animals = {
        a.id: a
        for a in await uow.animals.get_many(farm_id, list({m.animal_id for m in memberships}))
    }
    return [LotAnimal(m, animals[m.animal_id]) for m in memberships if m.animal_id in animals]
