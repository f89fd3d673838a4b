from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.treatments.validation import (
    ensure_non_negative,
    ensure_override,
    ensure_treatment_date,
    ensure_type,
)
from herdbook.application.use_cases.treatments.withdrawal import resolve_withdrawal
from herdbook.domain.models.treatment import Treatment
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordTreatmentInput:
    animal_id: UUID
    treatment_date: date
    type: str = "treatment"
    product_id: str | None = None
    product_name: str | None = None
    dose: Decimal | None = None
    dose_unit: str | None = None
    veterinarian_name: str | None = None
    diagnosis: str | None = None
    next_due_date: date | None = None
    cost: Decimal | None = None
    notes: str | None = None
    withdrawal_end_date: date | None = None


@dataclass(slots=True)
class TreatmentResult:
    treatment: Treatment
    warnings: list[str] = field(default_factory=list)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordTreatmentInput,
    *,
    today: date | None = None,
) -> TreatmentResult:
    treatment_type = ensure_type(payload.type)
    treatment_date = ensure_treatment_date(payload.treatment_date, today or today_local())
    override = ensure_override(treatment_date, payload.withdrawal_end_date)
    animal = await uow.animals.get(farm_id, payload.animal_id)
    if not animal:
        raise NotFound("Animal not found")
    resolved = await resolve_withdrawal(uow, payload.product_id, treatment_date)
    treatment = Treatment.create(
        farm_id=farm_id,
        animal_id=animal.id,
        type=treatment_type,
        treatment_date=treatment_date,
        product_id=payload.product_id,
        product_name=payload.product_name or resolved.product_name,
        dose=ensure_non_negative(payload.dose, "dose"),
        dose_unit=payload.dose_unit,
        veterinarian_name=payload.veterinarian_name,
        diagnosis=payload.diagnosis,
        next_due_date=payload.next_due_date,
        cost=ensure_non_negative(payload.cost, "cost"),
        notes=payload.notes,
        withdrawal_meat_until=resolved.meat_until,
        withdrawal_milk_until=resolved.milk_until,
        withdrawal_end_date=override,
    )
    created = await uow.treatments.add(treatment)
    await uow.commit()
    logger.info(
        "Treatment recorded: id=%s animal=%s meat_until=%s milk_until=%s",
        created.id,
        animal.id,
        created.withdrawal_meat_until,
        created.withdrawal_milk_until,
    )
    return TreatmentResult(treatment=created, warnings=resolved.warnings)
