from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.animals import (
    delete_animal,
    get_animal,
    get_status,
    list_animals,
    register_animal,
    register_birth,
    update_animal,
)
from herdbook.application.use_cases.lots import list_animal_lots
from herdbook.application.use_cases.treatments import check_withdrawal
from herdbook.application.use_cases.weighings import compute_growth, is_overdue, weight_history
from herdbook.config.settings import Settings
from herdbook.interfaces.http.deps import (
    get_app_settings,
    get_farm_id,
    get_page_params,
    get_today,
    get_uow,
)
from herdbook.interfaces.http.schemas.animals import (
    AnimalCreate,
    AnimalLotResponse,
    AnimalResponse,
    AnimalStatusResponse,
    AnimalUpdate,
    BirthCreate,
    BirthResponse,
    GrowthResponse,
    WeighingOverdueResponse,
    WeightHistoryEntryResponse,
    WithdrawalResponse,
)
from herdbook.interfaces.http.schemas.common import PageResponse, to_page_response
from herdbook.interfaces.http.schemas.movements import MovementResponse
from herdbook.interfaces.http.schemas.weighings import WeighingResponse

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get("", response_model=PageResponse[AnimalResponse])
async def list_animals_endpoint(
    status_filter: str | None = Query(None, alias="status"),
    species_id: str | None = Query(None, alias="speciesId"),
    sex: str | None = Query(None),
    lot_id: UUID | None = Query(None, alias="lotId"),
    params: PageParams = Depends(get_page_params),
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    page = await list_animals.execute(
        uow,
        farm_id,
        params,
        status=status_filter,
        species_id=species_id,
        sex=sex,
        lot_id=lot_id,
        max_limit=settings.max_page_limit,
    )
    return to_page_response(page, AnimalResponse.from_domain)


@router.post("", response_model=AnimalResponse, status_code=status.HTTP_201_CREATED)
async def register_animal_endpoint(
    payload: AnimalCreate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> AnimalResponse:
    created = await register_animal.execute(
        uow,
        farm_id,
        register_animal.RegisterAnimalInput(**payload.model_dump()),
        today=today,
    )
    return AnimalResponse.from_domain(created)


@router.post("/births", response_model=BirthResponse, status_code=status.HTTP_201_CREATED)
async def register_birth_endpoint(
    payload: BirthCreate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> BirthResponse:
    result = await register_birth.execute(
        uow,
        farm_id,
        register_birth.RegisterBirthInput(**payload.model_dump()),
        today=today,
    )
    return BirthResponse(
        calf=AnimalResponse.from_domain(result.calf),
        movement=MovementResponse.from_event(result.event),
        weighing=WeighingResponse.from_domain(result.weighing) if result.weighing else None,
    )


@router.get("/{animal_id}", response_model=AnimalResponse)
async def get_animal_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> AnimalResponse:
    animal = await get_animal.execute(uow, farm_id, animal_id)
    return AnimalResponse.from_domain(animal)


@router.put("/{animal_id}", response_model=AnimalResponse)
async def update_animal_endpoint(
    animal_id: UUID,
    payload: AnimalUpdate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> AnimalResponse:
    updated = await update_animal.execute(
        uow,
        farm_id,
        animal_id,
        update_animal.UpdateAnimalInput(**payload.model_dump()),
        today=today,
    )
    return AnimalResponse.from_domain(updated)


@router.delete("/{animal_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_animal_endpoint(
    animal_id: UUID,
    version: int = Query(...),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> Response:
    await delete_animal.execute(uow, farm_id, animal_id, version)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{animal_id}/status", response_model=AnimalStatusResponse)
async def get_status_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> AnimalStatusResponse:
    view = await get_status.execute(uow, farm_id, animal_id)
    return AnimalStatusResponse.from_domain(view)


@router.get("/{animal_id}/growth", response_model=GrowthResponse)
async def get_growth_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> GrowthResponse:
    growth = await compute_growth.execute(uow, farm_id, animal_id)
    if growth is None:
        return GrowthResponse(animal_id=animal_id)
    return GrowthResponse.from_domain(growth, animal_id=animal_id)


@router.get("/{animal_id}/weight-history", response_model=list[WeightHistoryEntryResponse])
async def get_weight_history_endpoint(
    animal_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> list[WeightHistoryEntryResponse]:
    entries = await weight_history.execute(uow, farm_id, animal_id)
    return [
        WeightHistoryEntryResponse.from_domain(
            entry, weighing=WeighingResponse.from_domain(entry.weighing)
        )
        for entry in entries
    ]


@router.get("/{animal_id}/weighing-overdue", response_model=WeighingOverdueResponse)
async def get_weighing_overdue_endpoint(
    animal_id: UUID,
    threshold_days: int | None = Query(None, alias="thresholdDays", ge=0),
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
) -> WeighingOverdueResponse:
    result = await is_overdue.execute(
        uow,
        farm_id,
        animal_id,
        threshold_days=(
            threshold_days if threshold_days is not None else settings.weighing_overdue_days
        ),
        today=today,
    )
    return WeighingOverdueResponse.from_domain(result)


@router.get("/{animal_id}/withdrawal", response_model=WithdrawalResponse)
async def get_withdrawal_endpoint(
    animal_id: UUID,
    metric: str = Query("meat"),
    as_of: date | None = Query(None, alias="asOf"),
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> WithdrawalResponse:
    result = await check_withdrawal.execute(
        uow, farm_id, animal_id, metric=metric, as_of=as_of or today
    )
    return WithdrawalResponse.from_domain(result)


@router.get("/{animal_id}/lots", response_model=list[AnimalLotResponse])
async def list_animal_lots_endpoint(
    animal_id: UUID,
    include_history: bool = Query(True, alias="includeHistory"),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> list[AnimalLotResponse]:
    items = await list_animal_lots.execute(
        uow, farm_id, animal_id, include_history=include_history
    )
    return [
        AnimalLotResponse(
            lot_id=item.lot.id,
            lot_name=item.lot.name,
            lot_type=item.lot.type,
            lot_status=item.lot.status,
            joined_at=item.membership.joined_at,
            left_at=item.membership.left_at,
        )
        for item in items
    ]
