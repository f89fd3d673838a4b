from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, timedelta

from herdbook.domain.models.treatment import ProductWithdrawal, Treatment
from herdbook.domain.value_objects.treatment_type import WithdrawalMetric


def withdrawal_days(product: ProductWithdrawal, metric: WithdrawalMetric) -> int | None:
    if metric is WithdrawalMetric.MEAT:
        return product.withdrawal_meat_days
    if product.withdrawal_milk_hours is None:
        return None
    return math.ceil(product.withdrawal_milk_hours / 24)


def withdrawal_end_date(
    treatment_date: date, product: ProductWithdrawal, metric: WithdrawalMetric
) -> date | None:
    days = withdrawal_days(product, metric)
    if days is None:
        return None
    return treatment_date + timedelta(days=days)


def latest_treatment_for(
    treatments: Iterable[Treatment], as_of: date, metric: WithdrawalMetric
) -> Treatment | None:
    candidates = [
        t
        for t in treatments
        if t.deleted_at is None
        and t.treatment_date <= as_of
        and t.withdrawal_until(metric) is not None
    ]
    if not candidates:
        return None
    return max(candidates, key=lambda t: (t.treatment_date, t.created_at))


def is_under_withdrawal(
    treatments: Iterable[Treatment], as_of: date, metric: WithdrawalMetric
) -> bool:
    latest = latest_treatment_for(treatments, as_of, metric)
    if latest is None:
        return False
    return as_of <= latest.withdrawal_until(metric)
