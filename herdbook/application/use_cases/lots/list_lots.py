from __future__ import annotations

from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import Page, PageParams
from herdbook.application.use_cases.lots.validation import ensure_status, ensure_type
from herdbook.domain.models.lot import Lot

SORTABLE_FIELDS = ("created_at", "updated_at", "name", "type", "status")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    params: PageParams,
    *,
    type: str | None = None,
    status: str | None = None,
    is_active: bool | None = None,
    max_limit: int = 100,
) -> Page[Lot]:
    params.validate(max_limit=max_limit, sortable=SORTABLE_FIELDS)
    filters = {
        "type": ensure_type(type) if type else None,
        "status": ensure_status(status) if status else None,
        "is_active": is_active,
        "search": params.search,
    }
    items = await uow.lots.list(
        farm_id,
        offset=params.offset,
        limit=params.limit,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
        **filters,
    )
    total = await uow.lots.count(farm_id, **filters)
    return Page(items=items, total=total, page=params.page, limit=params.limit)
