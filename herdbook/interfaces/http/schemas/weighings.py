from __future__ import annotations

from datetime import date
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from herdbook.interfaces.http.schemas.common import CamelModel, EntityResponse


class WeighingCreate(CamelModel):
    animal_id: UUID
    weight: Decimal
    weight_date: date
    purpose: str = "routine"
    unit: str = "kg"
    method: str | None = None
    notes: str | None = Field(default=None, max_length=2000)


class WeighingUpdate(CamelModel):
    version: int
    weight: Decimal | None = None
    weight_date: date | None = None
    purpose: str | None = None
    unit: str | None = None
    method: str | None = None
    notes: str | None = Field(default=None, max_length=2000)


class WeighingResponse(EntityResponse):
    animal_id: UUID
    weight: Decimal
    weight_kg: Decimal
    unit: str
    weight_date: date
    purpose: str
    method: str | None = None
    notes: str | None = None
