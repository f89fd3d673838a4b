from __future__ import annotations

from datetime import date
from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import Page, PageParams, ensure_date_range
from herdbook.application.use_cases.weighings.validation import ensure_purpose
from herdbook.domain.models.weighing import Weighing

SORTABLE_FIELDS = ("weight_date", "weight", "created_at")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    params: PageParams,
    *,
    animal_id: UUID | None = None,
    purpose: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    max_limit: int = 100,
) -> Page[Weighing]:
    params.validate(max_limit=max_limit, sortable=SORTABLE_FIELDS)
    ensure_date_range(date_from, date_to)
    filters = {
        "animal_id": animal_id,
        "purpose": ensure_purpose(purpose) if purpose else None,
        "date_from": date_from,
        "date_to": date_to,
    }
    items = await uow.weighings.list(
        farm_id,
        offset=params.offset,
        limit=params.limit,
        sort_by=params.sort_by,
        sort_order=params.sort_order,
        **filters,
    )
    total = await uow.weighings.count(farm_id, **filters)
    return Page(items=items, total=total, page=params.page, limit=params.limit)
