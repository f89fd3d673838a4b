from __future__ import annotations

from datetime import date
from uuid import UUID

from herdbook.application.errors import ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import Page, PageParams, ensure_date_range
from herdbook.domain.models.movement_event import MovementEvent
from herdbook.domain.models.movement_payloads import InvalidPayload, parse_movement_type


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    params: PageParams,
    *,
    type: str | None = None,
    animal_id: UUID | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
    max_limit: int = 100,
) -> Page[MovementEvent]:
    params.validate(max_limit=max_limit, sortable=("movement_date",))
    ensure_date_range(date_from, date_to)
    if type is not None:
        try:
            type = parse_movement_type(type).value
        except InvalidPayload as exc:
            raise ValidationError(str(exc)) from exc
    filters = {
        "type": type,
        "animal_id": animal_id,
        "date_from": date_from,
        "date_to": date_to,
    }
    items = await uow.movements.list(
        farm_id,
        offset=params.offset,
        limit=params.limit,
        sort_order=params.sort_order,
        **filters,
    )
    total = await uow.movements.count(farm_id, **filters)
    return Page(items=items, total=total, page=params.page, limit=params.limit)
