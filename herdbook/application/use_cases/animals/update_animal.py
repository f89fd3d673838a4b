from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update, check_version
from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.animals.validation import (
    clean_text,
    ensure_identity,
    ensure_not_future,
    ensure_parents,
    ensure_sex,
    ensure_species,
    ensure_status,
)
from herdbook.domain.models.animal import IDENTIFIER_FIELDS, Animal
from herdbook.domain.value_objects.animal_status import AnimalStatus
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)

_PLAIN_FIELDS = ("breed_id", "birth_date", "acquisition_date", "notes", "is_active")


@dataclass(slots=True)
class UpdateAnimalInput:
    """Partial update; None leaves a field untouched, "" clears an identifier."""

    version: int
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    name: str | None = None
    species_id: str | None = None
    breed_id: str | None = None
    sex: str | None = None
    birth_date: date | None = None
    # Genealogy fields
    mother_id: UUID | None = None
    father_id: UUID | None = None
    acquisition_date: date | None = None
    notes: str | None = None
    is_active: bool | None = None
    status: str | None = None


async def _status_change(
    uow: UnitOfWork, farm_id: UUID, existing: Animal, status: str, today: date
) -> dict:
    status = ensure_status(status)
    if status == existing.status:
        return {}
    if await uow.movements.count_for_animal(farm_id, existing.id):
        raise ValidationError(
            "Animal status is derived from its movement history and cannot be edited directly",
            details={"field": "status"},
        )
    terminal = AnimalStatus(status).is_terminal
    return {"status": status, "status_changed_at": today if terminal else None}


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    payload: UpdateAnimalInput,
    *,
    today: date | None = None,
) -> Animal:
    today = today or today_local()
    existing = await uow.animals.get(farm_id, animal_id)
    if not existing:
        raise NotFound("Animal not found")
    data: dict = {}
    for field_name in IDENTIFIER_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = clean_text(value)
    if data:
        merged = {name: getattr(existing, name) for name in IDENTIFIER_FIELDS}
        merged.update(data)
        ensure_identity(merged)
    if payload.name is not None:
        data["name"] = clean_text(payload.name)
    if payload.species_id is not None:
        data["species_id"] = ensure_species(payload.species_id)
    if payload.sex is not None:
        data["sex"] = ensure_sex(payload.sex)
    ensure_not_future(payload.birth_date, today, "birth_date")
    ensure_not_future(payload.acquisition_date, today, "acquisition_date")
    for field_name in _PLAIN_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if payload.mother_id is not None or payload.father_id is not None:
        await ensure_parents(
            uow,
            farm_id,
            mother_id=payload.mother_id,
            father_id=payload.father_id,
            animal_id=animal_id,
        )
        if payload.mother_id is not None:
            data["mother_id"] = payload.mother_id
        if payload.father_id is not None:
            data["father_id"] = payload.father_id
    if payload.status is not None:
        data.update(await _status_change(uow, farm_id, existing, payload.status, today))
    if not data:
        check_version(existing, payload.version, entity="animal")
        return existing
    updated = await apply_versioned_update(
        uow.animals, farm_id, animal_id, data, payload.version, entity="animal"
    )
    await uow.commit()
    if "status" in data:
        logger.info(
            "Animal status set manually: id=%s %s -> %s", animal_id, existing.status, updated.status
        )
    return updated
