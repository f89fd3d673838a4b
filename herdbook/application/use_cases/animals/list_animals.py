from __future__ import annotations

from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import Page, PageParams
from herdbook.application.use_cases.animals.validation import ensure_sex, ensure_status
from herdbook.domain.models.animal import Animal

SORTABLE_FIELDS = (
    "created_at",
    "updated_at",
    "official_number",
    "visual_id",
    "name",
    "birth_date",
    "status",
)


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    params: PageParams,
    *,
    status: str | None = None,
    species_id: str | None = None,
    sex: str | None = None,
    lot_id: UUID | None = None,
    max_limit: int = 100,
) -> Page[Animal]:
    params.validate(max_limit=max_limit, sortable=SORTABLE_FIELDS)
    filters = {
        "status": ensure_status(status) if status else None,
        "species_id": species_id,
        "sex": ensure_sex(sex) if sex else None,
        "lot_id": lot_id,
        "search": params.search,
    }
    items = await uow.animals.list(
        farm_id,
        offset=params.offset,
        limit=params.limit,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
        **filters,
    )
    total = await uow.animals.count(farm_id, **filters)
    return Page(items=items, total=total, page=params.page, limit=params.limit)
