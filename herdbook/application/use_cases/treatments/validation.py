from __future__ import annotations

from datetime import date
from decimal import Decimal

from herdbook.application.errors import ValidationError
from herdbook.domain.value_objects.treatment_type import TreatmentType, WithdrawalMetric


def ensure_type(type: str) -> str:
    try:
        return TreatmentType(type).value
    except ValueError as exc:
        raise ValidationError("type must be 'treatment' or 'vaccination'") from exc


def ensure_metric(metric: str) -> WithdrawalMetric:
    try:
        return WithdrawalMetric(metric)
    except ValueError as exc:
        raise ValidationError("metric must be 'meat' or 'milk'") from exc


def ensure_treatment_date(treatment_date: date, today: date) -> date:
    if treatment_date > today:
        raise ValidationError("Treatment date cannot be in the future")
    return treatment_date


def ensure_non_negative(value: Decimal | None, field: str) -> Decimal | None:
    if value is not None and value < 0:
        raise ValidationError(f"{field} must not be negative")
    return value


def ensure_override(treatment_date: date, withdrawal_end_date: date | None) -> date | None:
    if withdrawal_end_date is not None and withdrawal_end_date < treatment_date:
        raise ValidationError("withdrawal_end_date cannot be before the treatment date")
    return withdrawal_end_date
