from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, timedelta
from decimal import Decimal

from herdbook.domain.models.weighing import Weighing


@dataclass(frozen=True, slots=True)
class GrowthRate:
    daily_gain_kg: Decimal
    latest_weight_kg: Decimal
    previous_weight_kg: Decimal
    latest_date: date
    previous_date: date
    days: int


@dataclass(frozen=True, slots=True)
class WeightHistoryEntry:
    weighing: Weighing
    previous_weight_kg: Decimal | None = None
    weight_gain_kg: Decimal | None = None
    daily_gain_kg: Decimal | None = None


def _by_date(weighings: Iterable[Weighing], *, reverse: bool) -> list[Weighing]:
    return sorted(weighings, key=lambda w: (w.weight_date, w.created_at), reverse=reverse)


def _daily_gain(gain: Decimal, days: int) -> Decimal:
    return gain / Decimal(days)


def compute_growth(weighings: Iterable[Weighing]) -> GrowthRate | None:
    """Daily gain between the two most recent weighings, in kg/day.

    Undefined (None) with fewer than two weighings or when both fall on the same day.
    """
    recent = _by_date(weighings, reverse=True)[:2]
    if len(recent) < 2:
        return None
    latest, previous = recent
    days = (latest.weight_date - previous.weight_date).days
    if days == 0:
        return None
    return GrowthRate(
        daily_gain_kg=_daily_gain(latest.weight_kg - previous.weight_kg, days),
        latest_weight_kg=latest.weight_kg,
        previous_weight_kg=previous.weight_kg,
        latest_date=latest.weight_date,
        previous_date=previous.weight_date,
        days=days,
    )


def weight_history(weighings: Iterable[Weighing]) -> list[WeightHistoryEntry]:
    entries: list[WeightHistoryEntry] = []
    previous: Weighing | None = None
    for weighing in _by_date(weighings, reverse=False):
        if previous is None:
            entries.append(WeightHistoryEntry(weighing=weighing))
        else:
            gain = weighing.weight_kg - previous.weight_kg
            days = (weighing.weight_date - previous.weight_date).days
            entries.append(
                WeightHistoryEntry(
                    weighing=weighing,
                    previous_weight_kg=previous.weight_kg,
                    weight_gain_kg=gain,
                    daily_gain_kg=_daily_gain(gain, days) if days else None,
                )
            )
        previous = weighing
    return entries


def is_overdue(latest: Weighing | None, today: date, threshold_days: int = 30) -> bool:
    if latest is None:
        return True
    return latest.weight_date < today - timedelta(days=threshold_days)
