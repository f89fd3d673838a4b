from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update, check_version
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


@dataclass(slots=True)
class UpdateWeighingInput:
    version: int
    weight: Decimal | None = None
    weight_date: date | None = None
    purpose: str | None = None
    unit: str | None = None
    method: str | None = None
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    weighing_id: UUID,
    payload: UpdateWeighingInput,
    *,
    today: date | None = None,
) -> Weighing:
    existing = await uow.weighings.get(farm_id, weighing_id)
    if not existing:
        raise NotFound("Weighing not found")
    data: dict = {}
    if payload.weight is not None:
        data["weight"] = ensure_weight(payload.weight)
    if payload.weight_date is not None:
        data["weight_date"] = ensure_weight_date(payload.weight_date, today or today_local())
    if payload.purpose is not None:
        data["purpose"] = ensure_purpose(payload.purpose)
    if payload.unit is not None:
        data["unit"] = ensure_unit(payload.unit)
    if payload.method is not None:
        data["method"] = ensure_method(payload.method)
    if payload.notes is not None:
        data["notes"] = payload.notes
    if not data:
        check_version(existing, payload.version, entity="weighing")
        return existing
    updated = await apply_versioned_update(
        uow.weighings, farm_id, weighing_id, data, payload.version, entity="weighing"
    )
    await uow.commit()
    return updated
