from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update, check_version
from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.lots.validation import (
    ensure_name,
    ensure_price,
    ensure_type,
    ensure_unique_name,
)
from herdbook.domain.models.lot import Lot

_PLAIN_FIELDS = (
    "description",
    "notes",
    "product_id",
    "product_name",
    "treatment_date",
    "withdrawal_end_date",
    "veterinarian_id",
    "veterinarian_name",
    "buyer_name",
    "seller_name",
    "is_active",
)


@dataclass(slots=True)
class UpdateLotInput:
    """Partial update; status changes go through close_lot."""

    version: int
    name: str | None = None
    type: str | None = None
    description: str | None = None
    notes: str | None = None
    product_id: str | None = None
    product_name: str | None = None
    treatment_date: date | None = None
    withdrawal_end_date: date | None = None
    veterinarian_id: str | None = None
    veterinarian_name: str | None = None
    price_total: Decimal | None = None
    buyer_name: str | None = None
    seller_name: str | None = None
    is_active: bool | None = None


async def execute(uow: UnitOfWork, farm_id: UUID, lot_id: UUID, payload: UpdateLotInput) -> Lot:
    existing = await uow.lots.get(farm_id, lot_id)
    if not existing:
        raise NotFound("Lot not found")
    data: dict = {}
    if payload.name is not None:
        name = ensure_name(payload.name)
        if name.lower() != existing.name.lower():
            await ensure_unique_name(uow, farm_id, name, exclude_id=lot_id)
        data["name"] = name
    if payload.type is not None:
        data["type"] = ensure_type(payload.type)
    if payload.price_total is not None:
        data["price_total"] = ensure_price(payload.price_total)
    for field_name in _PLAIN_FIELDS:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
    if not data:
        check_version(existing, payload.version, entity="lot")
        return existing
    updated = await apply_versioned_update(
        uow.lots, farm_id, lot_id, data, payload.version, entity="lot"
    )
    await uow.commit()
    return updated
