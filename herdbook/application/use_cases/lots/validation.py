from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from herdbook.application.errors import ConflictError, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.value_objects.lot_type import LotStatus, LotType


def ensure_name(name: str | None) -> str:
    if not name or not name.strip():
        raise ValidationError("Lot name is required")
    return name.strip()


def ensure_type(type: str) -> str:
    try:
        return LotType(type).value
    except ValueError as exc:
        allowed = ", ".join(t.value for t in LotType)
        raise ValidationError(f"Invalid lot type '{type}'. Must be one of: {allowed}") from exc


def ensure_status(status: str) -> str:
    try:
        return LotStatus(status).value
    except ValueError as exc:
        allowed = ", ".join(s.value for s in LotStatus)
        raise ValidationError(f"Invalid lot status '{status}'. Must be one of: {allowed}") from exc


def ensure_price(price: Decimal | None) -> Decimal | None:
    if price is not None and price < 0:
        raise ValidationError("price_total must not be negative")
    return price


async def ensure_unique_name(
    uow: UnitOfWork, farm_id: UUID, name: str, *, exclude_id: UUID | None = None
) -> None:
    existing = await uow.lots.find_by_name(farm_id, name)
    if existing and existing.id != exclude_id:
        raise ConflictError(
            f"A lot named '{name}' already exists", details={"conflicting_id": str(existing.id)}
        )
