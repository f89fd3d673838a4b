from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update, check_version
from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.lots.validation import ensure_status
from herdbook.domain.models.lot import Lot
from herdbook.domain.value_objects.lot_type import LotStatus

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CloseLotInput:
    version: int
    status: str = LotStatus.CLOSED.value


async def execute(uow: UnitOfWork, farm_id: UUID, lot_id: UUID, payload: CloseLotInput) -> Lot:
    status = LotStatus(ensure_status(payload.status))
    if not status.is_terminal:
        raise ValidationError("A lot can only be closed, completed or archived")
    existing = await uow.lots.get(farm_id, lot_id)
    if not existing:
        raise NotFound("Lot not found")
    check_version(existing, payload.version, entity="lot")
    if not existing.is_open:
        raise ValidationError(f"Lot '{existing.name}' is already {existing.status}")
    # Memberships are kept as the lot's history
    updated = await apply_versioned_update(
        uow.lots,
        farm_id,
        lot_id,
        {"status": status.value, "closed_at": datetime.now(timezone.utc)},
        payload.version,
        entity="lot",
    )
    await uow.commit()
    logger.info("Lot closed: id=%s status=%s", lot_id, status.value)
    return updated
