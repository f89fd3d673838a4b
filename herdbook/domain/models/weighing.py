from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from herdbook.domain.value_objects.weight import WeighingPurpose, WeightUnit


@dataclass(slots=True)
class Weighing:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    weight: Decimal
    weight_date: date
    unit: str = WeightUnit.KG.value
    purpose: str = WeighingPurpose.ROUTINE.value
    method: str | None = None
    notes: str | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        weight: Decimal,
        weight_date: date,
        unit: str = WeightUnit.KG.value,
        purpose: str = WeighingPurpose.ROUTINE.value,
        method: str | None = None,
        notes: str | None = None,
    ) -> Weighing:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            weight=weight,
            weight_date=weight_date,
            unit=unit,
            purpose=purpose,
            method=method,
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def weight_kg(self) -> Decimal:
        return WeightUnit(self.unit).to_kg(Decimal(self.weight))
