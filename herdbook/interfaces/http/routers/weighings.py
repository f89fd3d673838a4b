from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.weighings import (
    delete_weighing,
    get_weighing,
    list_weighings,
    record_weighing,
    update_weighing,
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
from herdbook.interfaces.http.schemas.weighings import (
    WeighingCreate,
    WeighingResponse,
    WeighingUpdate,
)

router = APIRouter(prefix="/weighings", tags=["weighings"])


@router.get("", response_model=PageResponse[WeighingResponse])
async def list_weighings_endpoint(
    animal_id: UUID | None = Query(None, alias="animalId"),
    purpose: str | None = Query(None),
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    params: PageParams = Depends(get_page_params),
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    page = await list_weighings.execute(
        uow,
        farm_id,
        params,
        animal_id=animal_id,
        purpose=purpose,
        date_from=date_from,
        date_to=date_to,
        max_limit=settings.max_page_limit,
    )
    return to_page_response(page, WeighingResponse.from_domain)


@router.post("", response_model=WeighingResponse, status_code=status.HTTP_201_CREATED)
async def record_weighing_endpoint(
    payload: WeighingCreate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> WeighingResponse:
    weighing = await record_weighing.execute(
        uow,
        farm_id,
        record_weighing.RecordWeighingInput(**payload.model_dump()),
        today=today,
    )
    return WeighingResponse.from_domain(weighing)


@router.get("/{weighing_id}", response_model=WeighingResponse)
async def get_weighing_endpoint(
    weighing_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> WeighingResponse:
    weighing = await get_weighing.execute(uow, farm_id, weighing_id)
    return WeighingResponse.from_domain(weighing)


@router.put("/{weighing_id}", response_model=WeighingResponse)
async def update_weighing_endpoint(
    weighing_id: UUID,
    payload: WeighingUpdate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> WeighingResponse:
    weighing = await update_weighing.execute(
        uow,
        farm_id,
        weighing_id,
        update_weighing.UpdateWeighingInput(**payload.model_dump()),
        today=today,
    )
    return WeighingResponse.from_domain(weighing)


@router.delete("/{weighing_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_weighing_endpoint(
    weighing_id: UUID,
    version: int = Query(...),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> Response:
    await delete_weighing.execute(uow, farm_id, weighing_id, version)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
