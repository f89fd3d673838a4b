from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

from herdbook.domain.models.weighing import Weighing
from herdbook.domain.services.growth import compute_growth, is_overdue, weight_history

FARM = uuid4()
ANIMAL = uuid4()
DAY0 = date(2025, 1, 1)


def weighing(weight: str, day: date, unit: str = "kg") -> Weighing:
    return Weighing.create(
        farm_id=FARM, animal_id=ANIMAL, weight=Decimal(weight), weight_date=day, unit=unit
    )


def test_growth_undefined_without_two_records():
    assert compute_growth([]) is None
    assert compute_growth([weighing("100", DAY0)]) is None


def test_growth_undefined_for_same_day_records():
    assert compute_growth([weighing("100", DAY0), weighing("101", DAY0)]) is None


def test_growth_between_two_records():
    rate = compute_growth([weighing("112", DAY0 + timedelta(days=10)), weighing("100", DAY0)])
    assert rate is not None
    assert rate.daily_gain_kg == Decimal("1.2")
    assert rate.days == 10
    assert rate.latest_weight_kg == Decimal("112")
    assert rate.previous_date == DAY0


def test_growth_uses_two_most_recent_records():
    records = [
        weighing("80", DAY0 - timedelta(days=30)),
        weighing("100", DAY0),
        weighing("104", DAY0 + timedelta(days=4)),
    ]
    rate = compute_growth(records)
    assert rate.daily_gain_kg == Decimal("1")
    assert rate.previous_weight_kg == Decimal("100")


def test_growth_can_be_negative():
    rate = compute_growth([weighing("100", DAY0), weighing("99", DAY0 + timedelta(days=3))])
    assert rate.daily_gain_kg == Decimal("-1") / Decimal("3")
    assert rate.daily_gain_kg < 0


def test_growth_is_not_rounded():
    rate = compute_growth([weighing("100", DAY0), weighing("110", DAY0 + timedelta(days=3))])
    assert rate.daily_gain_kg == Decimal("10") / Decimal("3")
    assert rate.daily_gain_kg != Decimal("3.333")


def test_growth_converts_pounds():
    rate = compute_growth(
        [weighing("100", DAY0), weighing("100", DAY0 + timedelta(days=1), unit="lb")]
    )
    assert rate.latest_weight_kg == Decimal("45.359237")
    assert rate.daily_gain_kg == Decimal("-54.640763")


def test_weight_history_is_ascending_with_gains():
    entries = weight_history(
        [weighing("112", DAY0 + timedelta(days=10)), weighing("100", DAY0)]
    )
    assert [e.weighing.weight for e in entries] == [Decimal("100"), Decimal("112")]
    assert entries[0].previous_weight_kg is None
    assert entries[1].weight_gain_kg == Decimal("12")
    assert entries[1].daily_gain_kg == Decimal("1.2")


def test_overdue_threshold():
    latest = weighing("100", DAY0)
    assert is_overdue(None, DAY0)
    assert not is_overdue(latest, DAY0 + timedelta(days=30))
    assert is_overdue(latest, DAY0 + timedelta(days=31))
    assert is_overdue(latest, DAY0 + timedelta(days=8), threshold_days=7)
