from __future__ import annotations

import logging
from uuid import UUID

from herdbook.application.errors import ConflictError, NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.lot import LotMembership
from herdbook.domain.value_objects.animal_status import AnimalStatus

logger = logging.getLogger(__name__)


async def execute(
    uow: UnitOfWork, farm_id: UUID, lot_id: UUID, animal_id: UUID
) -> LotMembership:
    lot = await uow.lots.get(farm_id, lot_id)
    if not lot:
        raise NotFound("Lot not found")
    animal = await uow.animals.get(farm_id, animal_id)
    if not animal:
        raise NotFound("Animal not found")
    if not lot.is_open:
        raise ValidationError(f"Lot '{lot.name}' is {lot.status} and cannot receive animals")
    if animal.status != AnimalStatus.ALIVE.value:
        raise ValidationError(
            f"Animal {animal.display_id} is {animal.status} and cannot join a lot",
            details={"animal_id": str(animal.id), "status": animal.status},
        )
    if await uow.lot_memberships.get_active(farm_id, lot_id, animal_id):
        raise ConflictError(
            f"Animal {animal.display_id} is already in lot '{lot.name}'",
            details={"lot_id": str(lot_id), "animal_id": str(animal_id)},
        )
    membership = await uow.lot_memberships.add(LotMembership.create(farm_id, lot_id, animal_id))
    await uow.commit()
    logger.info("Animal added to lot: animal=%s lot=%s", animal_id, lot_id)
    return membership
