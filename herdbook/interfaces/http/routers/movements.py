from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.movements import (
    get_event,
    list_animals_for_event,
    list_events,
    movement_statistics,
    record_event,
)
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import (
    get_app_settings,
    get_farm_id,
    get_page_params,
    get_today,
    get_uow,
)
from herdbook.interfaces.http.schemas.common import PageResponse, to_page_response
from herdbook.interfaces.http.schemas.movements import (
    MovementAnimalResponse,
    MovementCreate,
    MovementResponse,
    MovementStatisticsResponse,
)

router = APIRouter(prefix="/movements", tags=["movements"])


@router.post("", response_model=MovementResponse, status_code=status.HTTP_201_CREATED)
async def record_movement(
    payload: MovementCreate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> MovementResponse:
    result = await record_event.execute(
        uow,
        farm_id,
        record_event.RecordEventInput(
            type=payload.type,
            animal_ids=payload.animal_ids,
            movement_date=payload.movement_date,
            payload=payload.payload,
            notes=payload.notes,
        ),
        today=today,
    )
    return MovementResponse.from_event(result.event, result.status_changes)


@router.get("", response_model=PageResponse[MovementResponse])
async def list_movements(
    type: str | None = Query(None),
    animal_id: UUID | None = Query(None, alias="animalId"),
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    params: PageParams = Depends(get_page_params),
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    page = await list_events.execute(
        uow,
        farm_id,
        params,
        type=type,
        animal_id=animal_id,
        date_from=date_from,
        date_to=date_to,
        max_limit=settings.max_page_limit,
    )
    return to_page_response(page, MovementResponse.from_event)


@router.get("/statistics", response_model=MovementStatisticsResponse)
async def get_movement_statistics(
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> MovementStatisticsResponse:
    stats = await movement_statistics.execute(
        uow, farm_id, date_from=date_from, date_to=date_to
    )
    return MovementStatisticsResponse.from_domain(stats)


@router.get("/{movement_id}", response_model=MovementResponse)
async def get_movement(
    movement_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> MovementResponse:
    event = await get_event.execute(uow, farm_id, movement_id)
    return MovementResponse.from_event(event)


@router.get("/{movement_id}/animals", response_model=list[MovementAnimalResponse])
async def list_movement_animals(
    movement_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> list[MovementAnimalResponse]:
    snapshots = await list_animals_for_event.execute(uow, farm_id, movement_id)
    return [MovementAnimalResponse.from_domain(snapshot) for snapshot in snapshots]
