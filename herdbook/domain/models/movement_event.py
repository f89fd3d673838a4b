from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from herdbook.domain.models.animal import Animal


@dataclass(slots=True)
class MovementEvent:
    """Immutable record of a state-changing occurrence for one or more animals."""

    id: UUID
    farm_id: UUID
    type: str
    movement_date: date
    payload: dict = field(default_factory=dict)
    notes: str | None = None
    animal_ids: list[UUID] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        type: str,
        movement_date: date,
        animal_ids: list[UUID],
        payload: dict | None = None,
        notes: str | None = None,
    ) -> MovementEvent:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            type=type,
            movement_date=movement_date,
            payload=payload or {},
            notes=notes,
            animal_ids=list(animal_ids),
            created_at=datetime.now(timezone.utc),
        )

    @property
    def sort_key(self) -> tuple[date, datetime]:
        return (self.movement_date, self.created_at)


@dataclass(slots=True)
class MovementAnimal:
    """Animal snapshot taken when the movement was recorded."""

    movement_id: UUID
    animal_id: UUID
    species_id: str
    sex: str
    status_before: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    breed_id: str | None = None
    birth_date: date | None = None

    @classmethod
    def snapshot(cls, movement_id: UUID, animal: Animal) -> MovementAnimal:
        return cls(
            movement_id=movement_id,
            animal_id=animal.id,
            species_id=animal.species_id,
            sex=animal.sex,
            status_before=animal.status,
            official_number=animal.official_number,
            visual_id=animal.visual_id,
            current_eid=animal.current_eid,
            breed_id=animal.breed_id,
            birth_date=animal.birth_date,
        )
