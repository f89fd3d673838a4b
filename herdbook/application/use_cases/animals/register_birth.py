from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.animals.register_animal import RegisterAnimalInput, add_animal
from herdbook.application.use_cases.movements.record_event import RecordEventInput, record
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.movement_event import MovementEvent
from herdbook.domain.models.weighing import Weighing
from herdbook.domain.value_objects.animal_status import AnimalSex
from herdbook.domain.value_objects.movement_type import MovementType
from herdbook.domain.value_objects.weight import WeighingMethod, WeighingPurpose
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RegisterBirthInput:
    mother_id: UUID
    movement_date: date
    sex: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    name: str | None = None
    species_id: str | None = None
    breed_id: str | None = None
    father_id: UUID | None = None
    birth_weight_kg: Decimal | None = None
    lot_id: UUID | None = None
    notes: str | None = None


@dataclass(slots=True)
class RegisterBirthOutput:
    calf: Animal
    event: MovementEvent
    weighing: Weighing | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RegisterBirthInput,
    *,
    today: date | None = None,
) -> RegisterBirthOutput:
    """Register a calf and its birth movement together."""
    today = today or today_local()
    mother = await uow.animals.get(farm_id, payload.mother_id)
    if not mother:
        raise NotFound("Mother not found")
    if mother.sex != AnimalSex.FEMALE.value:
        raise ValidationError("Mother must be a female animal")
    if mother.is_terminal:
        raise ValidationError(f"Mother {mother.display_id} is {mother.status}")
    if payload.movement_date > today:
        raise ValidationError("Movement date cannot be in the future")

    calf = await add_animal(
        uow,
        farm_id,
        RegisterAnimalInput(
            species_id=payload.species_id or mother.species_id,
            sex=payload.sex,
            official_number=payload.official_number,
            visual_id=payload.visual_id,
            current_eid=payload.current_eid,
            name=payload.name,
            breed_id=payload.breed_id or mother.breed_id,
            birth_date=payload.movement_date,
            mother_id=mother.id,
            father_id=payload.father_id,
            acquisition_date=payload.movement_date,
        ),
        today=today,
    )
    event_payload: dict = {}
    if payload.birth_weight_kg is not None:
        event_payload["birth_weight_kg"] = payload.birth_weight_kg
    if payload.lot_id is not None:
        event_payload["lot_id"] = payload.lot_id
    recorded = await record(
        uow,
        farm_id,
        RecordEventInput(
            type=MovementType.BIRTH.value,
            animal_ids=[calf.id],
            movement_date=payload.movement_date,
            payload=event_payload,
            notes=payload.notes,
        ),
        today=today,
    )
    weighing = None
    if payload.birth_weight_kg is not None:
        weighing = await uow.weighings.add(
            Weighing.create(
                farm_id=farm_id,
                animal_id=calf.id,
                weight=payload.birth_weight_kg,
                weight_date=payload.movement_date,
                purpose=WeighingPurpose.BIRTH.value,
                method=WeighingMethod.MANUAL.value,
            )
        )
    await uow.commit()
    logger.info("Birth registered: calf=%s mother=%s farm=%s", calf.id, mother.id, farm_id)
    return RegisterBirthOutput(calf=recorded.animals[0], event=recorded.event, weighing=weighing)
