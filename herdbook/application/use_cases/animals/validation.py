from __future__ import annotations

from datetime import date
from uuid import UUID

from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.animal import IDENTIFIER_FIELDS, has_identifier
from herdbook.domain.value_objects.animal_status import AnimalSex, AnimalStatus


def ensure_identity(values: dict) -> None:
    if not has_identifier(values):
        raise ValidationError(
            "At least one identifier is required: " + ", ".join(IDENTIFIER_FIELDS),
            details={"fields": list(IDENTIFIER_FIELDS)},
        )


def ensure_species(species_id: str | None) -> str:
    if not species_id or not species_id.strip():
        raise ValidationError("species_id is required")
    return species_id.strip()


def ensure_sex(sex: str | None) -> str:
    try:
        return AnimalSex(sex).value
    except ValueError as exc:
        raise ValidationError("sex must be 'male' or 'female'") from exc


def ensure_status(status: str) -> str:
    try:
        return AnimalStatus(status).value
    except ValueError as exc:
        allowed = ", ".join(s.value for s in AnimalStatus)
        raise ValidationError(f"Invalid status '{status}'. Must be one of: {allowed}") from exc


def ensure_not_future(value: date | None, today: date, field: str) -> None:
    if value is not None and value > today:
        raise ValidationError(f"{field} cannot be in the future")


async def ensure_parents(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    mother_id: UUID | None,
    father_id: UUID | None,
    animal_id: UUID | None = None,
) -> None:
    if animal_id is not None and animal_id in (mother_id, father_id):
        raise ValidationError("An animal cannot be its own parent")
    if mother_id is not None:
        mother = await uow.animals.get(farm_id, mother_id)
        if not mother:
            raise NotFound("Mother not found")
        if mother.sex != AnimalSex.FEMALE.value:
            raise ValidationError("Mother must be a female animal")
    if father_id is not None:
        father = await uow.animals.get(farm_id, father_id)
        if not father:
            raise NotFound("Father not found")
        if father.sex != AnimalSex.MALE.value:
            raise ValidationError("Father must be a male animal")


def clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None
