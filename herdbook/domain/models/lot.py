from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from herdbook.domain.value_objects.lot_type import LotStatus


@dataclass(slots=True)
class Lot:
    id: UUID
    farm_id: UUID
    name: str
    type: str
    status: str = LotStatus.OPEN.value
    description: str | None = None
    notes: str | None = None

    # Treatment/vaccination metadata (advisory)
    product_id: str | None = None
    product_name: str | None = None
    treatment_date: date | None = None
    withdrawal_end_date: date | None = None
    veterinarian_id: str | None = None
    veterinarian_name: str | None = None

    # Sale/purchase metadata (advisory)
    price_total: Decimal | None = None
    buyer_name: str | None = None
    seller_name: str | None = None

    closed_at: datetime | None = None
    is_active: bool = True
    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1
    animal_count: int | None = None

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        name: str,
        type: str,
        *,
        description: str | None = None,
        notes: str | None = None,
        product_id: str | None = None,
        product_name: str | None = None,
        treatment_date: date | None = None,
        withdrawal_end_date: date | None = None,
        veterinarian_id: str | None = None,
        veterinarian_name: str | None = None,
        price_total: Decimal | None = None,
        buyer_name: str | None = None,
        seller_name: str | None = None,
    ) -> Lot:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            name=name,
            type=type,
            status=LotStatus.OPEN.value,
            description=description,
            notes=notes,
            product_id=product_id,
            product_name=product_name,
            treatment_date=treatment_date,
            withdrawal_end_date=withdrawal_end_date,
            veterinarian_id=veterinarian_id,
            veterinarian_name=veterinarian_name,
            price_total=price_total,
            buyer_name=buyer_name,
            seller_name=seller_name,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @property
    def is_open(self) -> bool:
        return self.status == LotStatus.OPEN.value and self.deleted_at is None


@dataclass(slots=True)
class LotMembership:
    id: UUID
    farm_id: UUID
    lot_id: UUID
    animal_id: UUID
    joined_at: datetime
    left_at: datetime | None = None

    @classmethod
    def create(cls, farm_id: UUID, lot_id: UUID, animal_id: UUID) -> LotMembership:
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            lot_id=lot_id,
            animal_id=animal_id,
            joined_at=datetime.now(timezone.utc),
        )

    @property
    def is_active(self) -> bool:
        return self.left_at is None
