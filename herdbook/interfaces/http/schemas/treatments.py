from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from herdbook.interfaces.http.schemas.common import CamelModel, EntityResponse


class TreatmentFields(CamelModel):
    product_id: str | None = None
    product_name: str | None = None
    dose: Decimal | None = None
    dose_unit: str | None = None
    veterinarian_name: str | None = None
    diagnosis: str | None = None
    next_due_date: date | None = None
    cost: Decimal | None = None
    notes: str | None = Field(default=None, max_length=2000)
    withdrawal_end_date: date | None = None


class TreatmentCreate(TreatmentFields):
    animal_id: UUID
    treatment_date: date
    type: str = "treatment"


class TreatmentUpdate(TreatmentFields):
    version: int
    type: str | None = None
    treatment_date: date | None = None


class TreatmentResponse(EntityResponse, TreatmentFields):
    farm_id: UUID
    animal_id: UUID
    type: str
    treatment_date: date
    withdrawal_meat_until: date | None = None
    withdrawal_milk_until: date | None = None
    warnings: list[str] = Field(default_factory=list)
