from __future__ import annotations

from datetime import date
from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import Page, PageParams, ensure_date_range
from herdbook.application.use_cases.treatments.validation import ensure_type
from herdbook.domain.models.treatment import Treatment


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    params: PageParams,
    *,
    animal_id: UUID | None = None,
    type: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    max_limit: int = 100,
) -> Page[Treatment]:
    params.validate(max_limit=max_limit, sortable=("treatment_date",))
    ensure_date_range(date_from, date_to)
    filters = {
        "animal_id": animal_id,
        "type": ensure_type(type) if type else None,
        "date_from": date_from,
        "date_to": date_to,
        "search": params.search,
    }
    items = await uow.treatments.list(
        farm_id,
        offset=params.offset,
        limit=params.limit,
        sort_order=params.sort_order,
        **filters,
    )
    total = await uow.treatments.count(farm_id, **filters)
    return Page(items=items, total=total, page=params.page, limit=params.limit)
