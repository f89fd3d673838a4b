from __future__ import annotations

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status

from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.treatments import (
    delete_treatment,
    get_treatment,
    list_treatments,
    record_treatment,
    update_treatment,
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
from herdbook.interfaces.http.schemas.treatments import (
    TreatmentCreate,
    TreatmentResponse,
    TreatmentUpdate,
)

router = APIRouter(prefix="/treatments", tags=["treatments"])


@router.get("", response_model=PageResponse[TreatmentResponse])
async def list_treatments_endpoint(
    animal_id: UUID | None = Query(None, alias="animalId"),
    type: str | None = Query(None),
    date_from: date | None = Query(None, alias="dateFrom"),
    date_to: date | None = Query(None, alias="dateTo"),
    params: PageParams = Depends(get_page_params),
    farm_id: UUID = Depends(get_farm_id),
    settings: Settings = Depends(get_app_settings),
    uow=Depends(get_uow),
):
    page = await list_treatments.execute(
        uow,
        farm_id,
        params,
        animal_id=animal_id,
        type=type,
        date_from=date_from,
        date_to=date_to,
        max_limit=settings.max_page_limit,
    )
    return to_page_response(page, TreatmentResponse.from_domain)


@router.post("", response_model=TreatmentResponse, status_code=status.HTTP_201_CREATED)
async def record_treatment_endpoint(
    payload: TreatmentCreate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> TreatmentResponse:
    result = await record_treatment.execute(
        uow,
        farm_id,
        record_treatment.RecordTreatmentInput(**payload.model_dump()),
        today=today,
    )
    return TreatmentResponse.from_domain(result.treatment, warnings=result.warnings)


@router.get("/{treatment_id}", response_model=TreatmentResponse)
async def get_treatment_endpoint(
    treatment_id: UUID,
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> TreatmentResponse:
    treatment = await get_treatment.execute(uow, farm_id, treatment_id)
    return TreatmentResponse.from_domain(treatment)


@router.put("/{treatment_id}", response_model=TreatmentResponse)
async def update_treatment_endpoint(
    treatment_id: UUID,
    payload: TreatmentUpdate,
    farm_id: UUID = Depends(get_farm_id),
    today: date = Depends(get_today),
    uow=Depends(get_uow),
) -> TreatmentResponse:
    result = await update_treatment.execute(
        uow,
        farm_id,
        treatment_id,
        update_treatment.UpdateTreatmentInput(**payload.model_dump()),
        today=today,
    )
    return TreatmentResponse.from_domain(result.treatment, warnings=result.warnings)


@router.delete("/{treatment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_treatment_endpoint(
    treatment_id: UUID,
    version: int = Query(...),
    farm_id: UUID = Depends(get_farm_id),
    uow=Depends(get_uow),
) -> Response:
    await delete_treatment.execute(uow, farm_id, treatment_id, version)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
