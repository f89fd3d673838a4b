from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from herdbook.application.errors import NotFound
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.application.use_cases.treatments.validation import ensure_metric
from herdbook.domain.services.withdrawal import is_under_withdrawal, latest_treatment_for
from herdbook.utils.datetime_tz import today_local


@dataclass(slots=True)
class WithdrawalStatus:
    animal_id: UUID
    metric: str
    as_of: date
    under_withdrawal: bool
    until: date | None = None
    treatment_id: UUID | None = None


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    animal_id: UUID,
    *,
    metric: str = "meat",
    as_of: date | None = None,
) -> WithdrawalStatus:
    """Whether products from the animal are withheld on `as_of` for `metric`."""
    withdrawal_metric = ensure_metric(metric)
    as_of = as_of or today_local()
    if not await uow.animals.get(farm_id, animal_id):
        raise NotFound("Animal not found")
    treatments = await uow.treatments.list_for_animal(farm_id, animal_id, as_of=as_of)
    latest = latest_treatment_for(treatments, as_of, withdrawal_metric)
    return WithdrawalStatus(
        animal_id=animal_id,
        metric=withdrawal_metric.value,
        as_of=as_of,
        under_withdrawal=is_under_withdrawal(treatments, as_of, withdrawal_metric),
        until=latest.withdrawal_until(withdrawal_metric) if latest else None,
        treatment_id=latest.id if latest else None,
    )
