from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.lots import (
    add_animal,
    close_lot,
    create_lot,
    get_lot,
    list_lot_animals,
    list_lots,
    remove_animal,
    update_lot,
)
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import get_app_settings, get_farm_id, get_page_params, get_uow
from herdbook.interfaces.http.schemas.animals import AnimalResponse
from herdbook.interfaces.http.schemas.common import PageResponse, to_page_response
from herdbook.interfaces.http.schemas.lots import (
    LotAnimalAdd,
    LotAnimalResponse,
    LotClose,
    LotCreate,
    LotMembershipResponse,
    LotResponse,
    LotUpdate,
)

router = APIRouter(prefix="/lots", tags=["lots"])


@router.get("", response_model=PageResponse[LotResponse])
async def list_lots_endpoint(
    type: str | None = Query(None),
    status_filter: str | None = Query(None, alias="status"),
    is_active: bool | None = Query(None, alias="isActive"),
    params: PageParams = Depends(get_page_params),
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    page = await list_lots.execute(
        uow,
        farm_id,
        params,
        type=type,
        status=status_filter,
        is_active=is_active,
        max_limit=settings.max_page_limit,
    )
    return to_page_response(page, LotResponse.from_domain)


@router.post("", response_model=LotResponse, status_code=status.HTTP_201_CREATED)
async def create_lot_endpoint(
    payload: LotCreate,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> LotResponse:
    lot = await create_lot.execute(uow, farm_id, create_lot.CreateLotInput(**payload.model_dump()))
    return LotResponse.from_domain(lot)


@router.get("/{lot_id}", response_model=LotResponse)
async def get_lot_endpoint(
    lot_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> LotResponse:
    lot = await get_lot.execute(uow, farm_id, lot_id)
    return LotResponse.from_domain(lot)


@router.put("/{lot_id}", response_model=LotResponse)
async def update_lot_endpoint(
    lot_id: UUID,
    payload: LotUpdate,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> LotResponse:
    lot = await update_lot.execute(
        uow, farm_id, lot_id, update_lot.UpdateLotInput(**payload.model_dump())
    )
    return LotResponse.from_domain(lot)


@router.post("/{lot_id}/close", response_model=LotResponse)
async def close_lot_endpoint(
    lot_id: UUID,
    payload: LotClose,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> LotResponse:
    lot = await close_lot.execute(
        uow,
        farm_id,
        lot_id,
        close_lot.CloseLotInput(version=payload.version, status=payload.status),
    )
    return LotResponse.from_domain(lot)


@router.get("/{lot_id}/animals", response_model=list[LotAnimalResponse])
async def list_lot_animals_endpoint(
    lot_id: UUID,
    include_history: bool = Query(False, alias="includeHistory"),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> list[LotAnimalResponse]:
    items = await list_lot_animals.execute(uow, farm_id, lot_id, include_history=include_history)
    return [
        LotAnimalResponse(
            membership=LotMembershipResponse.from_domain(item.membership),
            animal=AnimalResponse.from_domain(item.animal),
        )
        for item in items
    ]


@router.post(
    "/{lot_id}/animals",
    response_model=LotMembershipResponse,
    status_code=status.HTTP_201_CREATED,
)
async def add_lot_animal_endpoint(
    lot_id: UUID,
    payload: LotAnimalAdd,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> LotMembershipResponse:
    membership = await add_animal.execute(uow, farm_id, lot_id, payload.animal_id)
    return LotMembershipResponse.from_domain(membership)


@router.delete("/{lot_id}/animals/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_lot_animal_endpoint(
    lot_id: UUID,
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> Response:
    await remove_animal.execute(uow, farm_id, lot_id, animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
