from __future__ import annotations

import logging
from datetime import datetime, timezone
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, farm_id: UUID, lot_id: UUID, animal_id: UUID) -> None:
    """Close the animal's active membership; the animal itself is left untouched."""
    if not await uow.lots.get(farm_id, lot_id):
        raise NotFound("Lot not found")
    membership = await uow.lot_memberships.get_active(farm_id, lot_id, animal_id)
    if not membership:
        raise NotFound("Animal is not an active member of this lot")
    await uow.lot_memberships.close(farm_id, membership.id, datetime.now(timezone.utc))
    await uow.commit()
    logger.info("Animal removed from lot: animal=%s lot=%s", animal_id, lot_id)
