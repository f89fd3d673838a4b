from __future__ import annotations

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from uuid import UUID

from pydantic import Field, field_validator

from herdbook.interfaces.http.schemas.common import CamelModel, EntityResponse
from herdbook.interfaces.http.schemas.movements import MovementResponse
from herdbook.interfaces.http.schemas.weighings import WeighingResponse

GAIN_QUANT = Decimal("0.001")


class AnimalBase(CamelModel):
    official_number: str | None = Field(default=None, max_length=64)
    visual_id: str | None = Field(default=None, max_length=64)
    current_eid: str | None = Field(default=None, max_length=64)
    name: str | None = Field(default=None, max_length=255)
    breed_id: str | None = None
    birth_date: date | None = None
    acquisition_date: date | None = None
    notes: str | None = None


class AnimalCreate(AnimalBase):
    species_id: str
    sex: str
    # Genealogy fields
    mother_id: UUID | None = None
    father_id: UUID | None = None


class AnimalUpdate(AnimalBase):
    version: int
    species_id: str | None = None
    sex: str | None = None
    mother_id: UUID | None = None
    father_id: UUID | None = None
    is_active: bool | None = None
    status: str | None = None


class AnimalResponse(EntityResponse):
    farm_id: UUID
    species_id: str
    breed_id: str | None = None
    sex: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    display_id: str
    name: str | None = None
    birth_date: date | None = None
    acquisition_date: date | None = None
    status: str
    status_changed_at: date | None = None
    mother_id: UUID | None = None
    father_id: UUID | None = None
    notes: str | None = None
    is_active: bool


class BirthCreate(CamelModel):
    mother_id: UUID
    movement_date: date
    sex: str
    official_number: str | None = Field(default=None, max_length=64)
    visual_id: str | None = Field(default=None, max_length=64)
    current_eid: str | None = Field(default=None, max_length=64)
    name: str | None = None
    species_id: str | None = None
    breed_id: str | None = None
    father_id: UUID | None = None
    birth_weight_kg: Decimal | None = None
    lot_id: UUID | None = None
    notes: str | None = None


class BirthResponse(CamelModel):
    calf: AnimalResponse
    movement: MovementResponse
    weighing: WeighingResponse | None = None


class AnimalStatusResponse(CamelModel):
    animal_id: UUID
    status: str
    projected_status: str
    status_changed_at: date | None = None
    temporarily_out: bool
    movement_count: int
    last_movement_date: date | None = None
    last_movement_type: str | None = None


def _round_gain(value: Decimal | None) -> Decimal | None:
    # kg/day is reported to the gram
    if value is None:
        return None
    return value.quantize(GAIN_QUANT, rounding=ROUND_HALF_UP)


class GrowthResponse(CamelModel):
    animal_id: UUID
    daily_gain_kg: Decimal | None = None
    latest_weight_kg: Decimal | None = None
    previous_weight_kg: Decimal | None = None
    latest_date: date | None = None
    previous_date: date | None = None
    days: int | None = None

    @field_validator("daily_gain_kg")
    @classmethod
    def round_gain(cls, v: Decimal | None) -> Decimal | None:
        return _round_gain(v)


class WeightHistoryEntryResponse(CamelModel):
    weighing: WeighingResponse
    previous_weight_kg: Decimal | None = None
    weight_gain_kg: Decimal | None = None
    daily_gain_kg: Decimal | None = None

    @field_validator("daily_gain_kg")
    @classmethod
    def round_gain(cls, v: Decimal | None) -> Decimal | None:
        return _round_gain(v)


class WeighingOverdueResponse(CamelModel):
    animal_id: UUID
    overdue: bool
    threshold_days: int
    last_weight_date: date | None = None
    days_since_last: int | None = None


class WithdrawalResponse(CamelModel):
    animal_id: UUID
    metric: str
    as_of: date
    under_withdrawal: bool
    until: date | None = None
    treatment_id: UUID | None = None


class AnimalLotResponse(CamelModel):
    lot_id: UUID
    lot_name: str
    lot_type: str
    lot_status: str
    joined_at: datetime
    left_at: datetime | None = None
