from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date

from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.services.withdrawal import withdrawal_end_date
from herdbook.domain.value_objects.treatment_type import WithdrawalMetric

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ResolvedWithdrawal:
    meat_until: date | None = None
    milk_until: date | None = None
    product_name: str | None = None
    warnings: list[str] = field(default_factory=list)


async def resolve_withdrawal(
    uow: UnitOfWork, product_id: str | None, treatment_date: date
) -> ResolvedWithdrawal:
    """Compute withdrawal dates from the product catalog.

    A product the catalog does not know yields null dates and a warning instead of an error.
    """
    if not product_id:
        return ResolvedWithdrawal()
    product = await uow.products.get_withdrawal(product_id)
    if product is None:
        logger.warning(
            "Product %s not found in catalog; withdrawal dates left empty", product_id
        )
        return ResolvedWithdrawal(
            warnings=[f"Product '{product_id}' not found; withdrawal period not computed"]
        )
    return ResolvedWithdrawal(
        meat_until=withdrawal_end_date(treatment_date, product, WithdrawalMetric.MEAT),
        milk_until=withdrawal_end_date(treatment_date, product, WithdrawalMetric.MILK),
        product_name=product.name,
    )
