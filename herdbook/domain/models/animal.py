from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from herdbook.domain.value_objects.animal_status import AnimalStatus

IDENTIFIER_FIELDS = ("official_number", "visual_id", "current_eid")


@dataclass(slots=True)
class Animal:
    id: UUID
    farm_id: UUID
    species_id: str
    sex: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    name: str | None = None
    breed_id: str | None = None
    birth_date: date | None = None
    status: str = AnimalStatus.ALIVE.value
    status_changed_at: date | None = None

    # Genealogy fields
    mother_id: UUID | None = None
    father_id: UUID | None = None

    acquisition_date: date | None = None
    notes: str | None = None
    is_active: bool = True

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        species_id: str,
        sex: str,
        official_number: str | None = None,
        visual_id: str | None = None,
        current_eid: str | None = None,
        name: str | None = None,
        breed_id: str | None = None,
        birth_date: date | None = None,
        mother_id: UUID | None = None,
        father_id: UUID | None = None,
        acquisition_date: date | None = None,
        notes: str | None = None,
    ) -> Animal:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            species_id=species_id,
            sex=sex,
            official_number=official_number,
            visual_id=visual_id,
            current_eid=current_eid,
            name=name,
            breed_id=breed_id,
            birth_date=birth_date,
            status=AnimalStatus.ALIVE.value,
            mother_id=mother_id,
            father_id=father_id,
            acquisition_date=acquisition_date,
            notes=notes,
            is_active=True,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def display_id(self) -> str:
        return self.official_number or self.visual_id or self.current_eid or str(self.id)

    @property
    def is_terminal(self) -> bool:
        return AnimalStatus(self.status).is_terminal

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)


def has_identifier(values: dict) -> bool:
    return any((values.get(name) or "").strip() for name in IDENTIFIER_FIELDS)
