from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.services.growth import is_overdue
from herdbook.utils.datetime_tz import today_local


@dataclass(slots=True)
class WeighingOverdue:
    animal_id: UUID
    overdue: bool
    threshold_days: int
    last_weight_date: date | None = None
    days_since_last: int | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    *,
    threshold_days: int = 30,
    today: date | None = None,
) -> WeighingOverdue:
    if threshold_days < 0:
        raise ValidationError("threshold_days must not be negative")
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    today = today or today_local()
    latest = await uow.weighings.latest_for_animal(farm_id, animal_id)
    return WeighingOverdue(
        animal_id=animal_id,
        overdue=is_overdue(latest, today, threshold_days),
        threshold_days=threshold_days,
        last_weight_date=latest.weight_date if latest else None,
        days_since_last=(today - latest.weight_date).days if latest else None,
    )
