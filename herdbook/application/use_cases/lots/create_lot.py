from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from uuid import UUID

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.lots.validation import (
    ensure_name,
    ensure_price,
    ensure_type,
    ensure_unique_name,
)
from herdbook.domain.models.lot import Lot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateLotInput:
    name: str
    type: str
    description: str | None = None
    notes: str | None = None
    # Advisory metadata, not enforced by membership operations
    product_id: str | None = None
    product_name: str | None = None
    treatment_date: date | None = None
    withdrawal_end_date: date | None = None
    veterinarian_id: str | None = None
    veterinarian_name: str | None = None
    price_total: Decimal | None = None
    buyer_name: str | None = None
    seller_name: str | None = None


async def execute(uow: UnitOfWork, farm_id: UUID, payload: CreateLotInput) -> Lot:
    name = ensure_name(payload.name)
    lot_type = ensure_type(payload.type)
    await ensure_unique_name(uow, farm_id, name)
    lot = Lot.create(
        farm_id=farm_id,
        name=name,
        type=lot_type,
        description=payload.description,
        notes=payload.notes,
        product_id=payload.product_id,
        product_name=payload.product_name,
        treatment_date=payload.treatment_date,
        withdrawal_end_date=payload.withdrawal_end_date,
        veterinarian_id=payload.veterinarian_id,
        veterinarian_name=payload.veterinarian_name,
        price_total=ensure_price(payload.price_total),
        buyer_name=payload.buyer_name,
        seller_name=payload.seller_name,
    )
    created = await uow.lots.add(lot)
    await uow.commit()
    logger.info("Lot created: id=%s name=%s type=%s", created.id, created.name, created.type)
    return created
