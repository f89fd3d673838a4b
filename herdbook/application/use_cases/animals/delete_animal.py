from __future__ import annotations

import logging
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_delete, check_version
from herdbook.application.errors import DependencyError, NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def count_dependencies(uow: UnitOfWork, farm_id: UUID, animal_id: UUID) -> dict[str, int]:
    counts = {
        "movements": await uow.movements.count_for_animal(farm_id, animal_id),
        "weighings": await uow.weighings.count_for_animal(farm_id, animal_id),
        "treatments": await uow.treatments.count_for_animal(farm_id, animal_id),
        "lot_memberships": await uow.lot_memberships.count_for_animal(farm_id, animal_id),
        "offspring": await uow.animals.count_offspring(farm_id, animal_id),
    }
    return {name: count for name, count in counts.items() if count}


async def execute(uow: UnitOfWork, farm_id: UUID, animal_id: UUID, version: int) -> None:
    existing = await uow.animals.get(farm_id, animal_id)
    if not existing:
        raise NotFound("Animal not found")
    check_version(existing, version, entity="animal")
    dependencies = await count_dependencies(uow, farm_id, animal_id)
    if dependencies:
        raise DependencyError(
            "Animal has related records and cannot be deleted",
            dependencies=dependencies,
        )
    await apply_versioned_delete(uow.animals, farm_id, animal_id, version, entity="animal")
    await uow.commit()
    logger.info("Animal deleted: id=%s farm=%s", animal_id, farm_id)
