from __future__ import annotations

from datetime import date, timedelta
from uuid import uuid4

from herdbook.domain.models.treatment import ProductWithdrawal, Treatment
from herdbook.domain.services.withdrawal import (
    is_under_withdrawal,
    latest_treatment_for,
    withdrawal_days,
    withdrawal_end_date,
)
from herdbook.domain.value_objects.treatment_type import WithdrawalMetric

FARM = uuid4()
ANIMAL = uuid4()
MEAT = WithdrawalMetric.MEAT
MILK = WithdrawalMetric.MILK


def treatment(day: date, **kwargs) -> Treatment:
    return Treatment.create(
        farm_id=FARM, animal_id=ANIMAL, type="treatment", treatment_date=day, **kwargs
    )


def test_withdrawal_days_per_metric():
    product = ProductWithdrawal(
        product_id="P-1", name="Oxytetracycline", withdrawal_meat_days=12, withdrawal_milk_hours=60
    )
    assert withdrawal_days(product, MEAT) == 12
    assert withdrawal_days(product, MILK) == 3
    assert withdrawal_end_date(date(2025, 1, 1), product, MEAT) == date(2025, 1, 13)


def test_missing_metric_yields_no_end_date():
    product = ProductWithdrawal("P-2", "Vitamin", withdrawal_meat_days=None)
    assert withdrawal_end_date(date(2025, 1, 1), product, MEAT) is None
    assert withdrawal_end_date(date(2025, 1, 1), product, MILK) is None


def test_under_withdrawal_until_end_date_inclusive():
    treated = treatment(date(2025, 1, 1), withdrawal_meat_until=date(2025, 1, 13))
    assert is_under_withdrawal([treated], date(2025, 1, 10), MEAT)
    assert is_under_withdrawal([treated], date(2025, 1, 13), MEAT)
    assert not is_under_withdrawal([treated], date(2025, 1, 14), MEAT)
    assert not is_under_withdrawal([treated], date(2025, 1, 10), MILK)


def test_treatments_after_as_of_are_ignored():
    future = treatment(date(2025, 2, 1), withdrawal_meat_until=date(2025, 3, 1))
    assert latest_treatment_for([future], date(2025, 1, 15), MEAT) is None


def test_latest_treatment_wins():
    older = treatment(date(2025, 1, 1), withdrawal_meat_until=date(2025, 1, 30))
    newer = treatment(date(2025, 1, 10), withdrawal_meat_until=date(2025, 1, 12))
    assert latest_treatment_for([older, newer], date(2025, 1, 20), MEAT) is newer
    assert not is_under_withdrawal([older, newer], date(2025, 1, 20), MEAT)


def test_manual_override_applies_to_both_metrics():
    treated = treatment(
        date(2025, 1, 1),
        withdrawal_meat_until=date(2025, 1, 5),
        withdrawal_end_date=date(2025, 1, 20),
    )
    assert is_under_withdrawal([treated], date(2025, 1, 15), MEAT)
    assert is_under_withdrawal([treated], date(2025, 1, 15), MILK)


def test_deleted_treatments_do_not_count():
    treated = treatment(date(2025, 1, 1), withdrawal_meat_until=date(2025, 1, 13))
    treated.deleted_at = treated.created_at + timedelta(days=1)
    assert not is_under_withdrawal([treated], date(2025, 1, 5), MEAT)
