from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.animals.validation import (
    clean_text,
    ensure_identity,
    ensure_not_future,
    ensure_parents,
    ensure_sex,
    ensure_species,
)
from herdbook.domain.models.animal import Animal
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RegisterAnimalInput:
    species_id: str
    sex: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    name: str | None = None
    breed_id: str | None = None
    birth_date: date | None = None
    # Genealogy fields
    mother_id: UUID | None = None
    father_id: UUID | None = None
    acquisition_date: date | None = None
    notes: str | None = None


async def add_animal(
    uow: UnitOfWork, farm_id: UUID, payload: RegisterAnimalInput, *, today: date
) -> Animal:
    """Validate and stage a new animal without committing."""
    identifiers = {
        "official_number": clean_text(payload.official_number),
        "visual_id": clean_text(payload.visual_id),
        "current_eid": clean_text(payload.current_eid),
    }
    ensure_identity(identifiers)
    species_id = ensure_species(payload.species_id)
    sex = ensure_sex(payload.sex)
    ensure_not_future(payload.birth_date, today, "birth_date")
    ensure_not_future(payload.acquisition_date, today, "acquisition_date")
    await ensure_parents(
        uow, farm_id, mother_id=payload.mother_id, father_id=payload.father_id
    )
    animal = Animal.create(
        farm_id=farm_id,
        species_id=species_id,
        sex=sex,
        name=clean_text(payload.name),
        breed_id=payload.breed_id,
        birth_date=payload.birth_date,
        mother_id=payload.mother_id,
        father_id=payload.father_id,
        acquisition_date=payload.acquisition_date,
        notes=payload.notes,
        **identifiers,
    )
    return await uow.animals.add(animal)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RegisterAnimalInput,
    *,
    today: date | None = None,
) -> Animal:
    created = await add_animal(uow, farm_id, payload, today=today or today_local())
    await uow.commit()
    logger.info("Animal registered: id=%s farm=%s", created.id, farm_id)
    return created
