from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.lot import Lot, LotMembership


@dataclass(slots=True)
class AnimalLot:
    membership: LotMembership
    lot: Lot


async def execute(
    uow: UnitOfWork, farm_id: UUID, animal_id: UUID, *, include_history: bool = True
) -> list[AnimalLot]:
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    memberships = await uow.lot_memberships.list_for_animal(
        farm_id, animal_id, include_history=include_history
    )
    result: list[AnimalLot] = []
    lots: dict[UUID, Lot | None] = {}
    for membership in memberships:
        if membership.lot_id not in lots:
            lots[membership.lot_id] = await uow.lots.get(farm_id, membership.lot_id)
        lot = lots[membership.lot_id]
        if lot is not None:
            result.append(AnimalLot(membership, lot))
    return result
