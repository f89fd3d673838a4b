from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.weighings.validation import (
    ensure_method,
    ensure_purpose,
    ensure_unit,
    ensure_weight,
    ensure_weight_date,
)
from herdbook.domain.models.weighing import Weighing
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordWeighingInput:
    animal_id: UUID
    weight: Decimal
    weight_date: date
    purpose: str = "routine"
    unit: str = "kg"
    method: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordWeighingInput,
    *,
    today: date | None = None,
) -> Weighing:
    weight = ensure_weight(payload.weight)
    weight_date = ensure_weight_date(payload.weight_date, today or today_local())
    weighing = Weighing.create(
        farm_id=farm_id,
        animal_id=payload.animal_id,
        weight=weight,
        weight_date=weight_date,
        unit=ensure_unit(payload.unit),
        purpose=ensure_purpose(payload.purpose),
        method=ensure_method(payload.method) if payload.method else None,
        notes=payload.notes,
    )
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound("Animal not found")
    created = await uow.weighings.add(weighing)
    await uow.commit()
    logger.info(
        "Weighing recorded: animal=%s weight=%s%s date=%s",
        animal.id,
        created.weight,
        created.unit,
        created.weight_date,
    )
    return created
