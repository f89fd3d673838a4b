from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import Field

from herdbook.interfaces.http.schemas.animals import AnimalResponse
from herdbook.interfaces.http.schemas.common import CamelModel, EntityResponse


class LotMetadata(CamelModel):
    description: str | None = None
    notes: str | None = Field(default=None, max_length=1024)
    product_id: str | None = None
    product_name: str | None = None
    treatment_date: date | None = None
    withdrawal_end_date: date | None = None
    veterinarian_id: str | None = None
    veterinarian_name: str | None = None
    price_total: Decimal | None = None
    buyer_name: str | None = None
    seller_name: str | None = None


class LotCreate(LotMetadata):
    name: str = Field(max_length=255)
    type: str


class LotUpdate(LotMetadata):
    version: int
    name: str | None = Field(default=None, max_length=255)
    type: str | None = None
    is_active: bool | None = None


class LotClose(CamelModel):
    version: int
    status: str = "closed"


class LotResponse(EntityResponse, LotMetadata):
    farm_id: UUID
    name: str
    type: str
    status: str
    closed_at: datetime | None = None
    is_active: bool
    animal_count: int | None = None


class LotAnimalAdd(CamelModel):
    animal_id: UUID


class LotMembershipResponse(CamelModel):
    id: UUID
    lot_id: UUID
    animal_id: UUID
    joined_at: datetime
    left_at: datetime | None = None


class LotAnimalResponse(CamelModel):
    membership: LotMembershipResponse
    animal: AnimalResponse
