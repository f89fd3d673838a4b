from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update, check_version
from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.treatments.record_treatment import TreatmentResult
from herdbook.application.use_cases.treatments.validation import (
    ensure_non_negative,
    ensure_override,
    ensure_treatment_date,
    ensure_type,
)
from herdbook.application.use_cases.treatments.withdrawal import resolve_withdrawal
from herdbook.utils.datetime_tz import today_local

_PLAIN_FIELDS = (
    "product_name",
    "dose_unit",
    "veterinarian_name",
    "diagnosis",
    "next_due_date",
    "notes",
)


@dataclass(slots=True)
class UpdateTreatmentInput:
    version: int
    type: str | None = None
    treatment_date: date | None = None
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


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    treatment_id: UUID,
    payload: UpdateTreatmentInput,
    *,
    today: date | None = None,
) -> TreatmentResult:
    existing = await uow.treatments.get(farm_id, treatment_id)
    if not existing:
        raise NotFound("Treatment not found")
    data: dict = {}
    if payload.type is not None:
        data["type"] = ensure_type(payload.type)
    if payload.treatment_date is not None:
        data["treatment_date"] = ensure_treatment_date(
            payload.treatment_date, today or today_local()
        )
    if payload.product_id is not None:
        data["product_id"] = payload.product_id
    if payload.dose is not None:
        data["dose"] = ensure_non_negative(payload.dose, "dose")
    if payload.cost is not None:
        data["cost"] = ensure_non_negative(payload.cost, "cost")
    for field_name in _PLAIN_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    treatment_date = data.get("treatment_date", existing.treatment_date)
    if payload.withdrawal_end_date is not None:
        data["withdrawal_end_date"] = payload.withdrawal_end_date
    ensure_override(treatment_date, data.get("withdrawal_end_date", existing.withdrawal_end_date))

    warnings: list[str] = []
    if "treatment_date" in data or "product_id" in data:
        resolved = await resolve_withdrawal(
            uow, data.get("product_id", existing.product_id), treatment_date
        )
        data["withdrawal_meat_until"] = resolved.meat_until
        data["withdrawal_milk_until"] = resolved.milk_until
        if resolved.product_name and "product_name" not in data:
            data["product_name"] = resolved.product_name
        warnings = resolved.warnings
    if not data:
        check_version(existing, payload.version, entity="treatment")
        return TreatmentResult(treatment=existing)
    updated = await apply_versioned_update(
        uow.treatments, farm_id, treatment_id, data, payload.version, entity="treatment"
    )
    await uow.commit()
    return TreatmentResult(treatment=updated, warnings=warnings)
