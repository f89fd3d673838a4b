from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.pagination import ensure_date_range
from herdbook.domain.value_objects.movement_type import MovementType


@dataclass(slots=True)
class MovementStatistics:
    total_movements: int = 0
    total_animals: int = 0
    by_type: dict[str, int] = field(
        default_factory=lambda: {t.value: 0 for t in MovementType}
    )
    total_sales: Decimal = Decimal("0")
    total_purchases: Decimal = Decimal("0")
    date_from: date | None = None
    date_to: date | None = None


def _amount(payload: dict, key: str) -> Decimal:
    value = payload.get(key)
    return Decimal(str(value)) if value is not None else Decimal("0")


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    *,
    date_from: date | None = None,
    date_to: date | None = None,
) -> MovementStatistics:
    ensure_date_range(date_from, date_to)
    events = await uow.movements.list(farm_id, date_from=date_from, date_to=date_to)
    stats = MovementStatistics(date_from=date_from, date_to=date_to)
    for event in events:
        stats.total_movements += 1
        stats.total_animals += len(event.animal_ids)
        stats.by_type[event.type] = stats.by_type.get(event.type, 0) + 1
        if event.type == MovementType.SALE.value:
            stats.total_sales += _amount(event.payload, "sale_price")
        elif event.type == MovementType.PURCHASE.value:
            stats.total_purchases += _amount(event.payload, "purchase_price")
    return stats
