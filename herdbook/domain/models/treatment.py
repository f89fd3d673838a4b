from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from herdbook.domain.value_objects.treatment_type import WithdrawalMetric


@dataclass(slots=True)
class Treatment:
    id: UUID
    farm_id: UUID
    animal_id: UUID
    type: str  # TreatmentType
    treatment_date: date

    # Product
    product_id: str | None = None
    product_name: str | None = None
    dose: Decimal | None = None
    dose_unit: str | None = None

    # Clinical
    veterinarian_name: str | None = None
    diagnosis: str | None = None
    next_due_date: date | None = None
    cost: Decimal | None = None
    notes: str | None = None

    # Withdrawal: computed per metric, plus an optional manual override
    withdrawal_meat_until: date | None = None
    withdrawal_milk_until: date | None = None
    withdrawal_end_date: date | None = None

    deleted_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        farm_id: UUID,
        animal_id: UUID,
        type: str,
        treatment_date: date,
        product_id: str | None = None,
        product_name: str | None = None,
        dose: Decimal | None = None,
        dose_unit: str | None = None,
        veterinarian_name: str | None = None,
        diagnosis: str | None = None,
        next_due_date: date | None = None,
        cost: Decimal | None = None,
        notes: str | None = None,
        withdrawal_meat_until: date | None = None,
        withdrawal_milk_until: date | None = None,
        withdrawal_end_date: date | None = None,
    ) -> Treatment:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            farm_id=farm_id,
            animal_id=animal_id,
            type=type,
            treatment_date=treatment_date,
            product_id=product_id,
            product_name=product_name,
            dose=dose,
            dose_unit=dose_unit,
            veterinarian_name=veterinarian_name,
            diagnosis=diagnosis,
            next_due_date=next_due_date,
            cost=cost,
            notes=notes,
            withdrawal_meat_until=withdrawal_meat_until,
            withdrawal_milk_until=withdrawal_milk_until,
            withdrawal_end_date=withdrawal_end_date,
            created_at=now,
            updated_at=now,
            version=1,
        )

    def withdrawal_until(self, metric: WithdrawalMetric | str) -> date | None:
        """Effective end date for `metric`; a manual override applies to both metrics."""
        if self.withdrawal_end_date is not None:
            return self.withdrawal_end_date
        if WithdrawalMetric(metric) is WithdrawalMetric.MEAT:
            return self.withdrawal_meat_until
        return self.withdrawal_milk_until


@dataclass(frozen=True, slots=True)
class ProductWithdrawal:
    """Withdrawal data of a catalog product (read-only reference)."""

    product_id: str
    name: str
    withdrawal_meat_days: int | None = None
    withdrawal_milk_hours: int | None = None
