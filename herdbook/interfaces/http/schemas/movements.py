from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Any
from uuid import UUID

from pydantic import Field

from herdbook.domain.models.movement_event import MovementEvent
from herdbook.interfaces.http.schemas.common import CamelModel, camelize_keys


class MovementCreate(CamelModel):
    type: str
    animal_ids: list[UUID] = Field(min_length=1)
    movement_date: date
    payload: dict[str, Any] | None = None
    notes: str | None = None


class MovementResponse(CamelModel):
    id: UUID
    farm_id: UUID
    type: str
    movement_date: date
    payload: dict[str, Any]
    notes: str | None = None
    animal_ids: list[UUID]
    created_at: datetime
    status_changes: dict[str, str] | None = None

    @classmethod
    def from_event(
        cls, event: MovementEvent, status_changes: dict[UUID, str] | None = None
    ) -> MovementResponse:
        return cls.from_domain(
            event,
            payload=camelize_keys(event.payload),
            status_changes=(
                {str(k): v for k, v in status_changes.items()} if status_changes else None
            ),
        )


class MovementAnimalResponse(CamelModel):
    movement_id: UUID
    animal_id: UUID
    species_id: str
    breed_id: str | None = None
    sex: str
    status_before: str
    official_number: str | None = None
    visual_id: str | None = None
    current_eid: str | None = None
    birth_date: date | None = None


class MovementStatisticsResponse(CamelModel):
    total_movements: int
    total_animals: int
    by_type: dict[str, int]
    total_sales: Decimal
    total_purchases: Decimal
    date_from: date | None = None
    date_to: date | None = None
