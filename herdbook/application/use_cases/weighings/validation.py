from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation

from herdbook.application.errors import ValidationError
from herdbook.domain.value_objects.weight import WeighingMethod, WeighingPurpose, WeightUnit


def _choice(enum_cls, value: str, field: str) -> str:
    try:
        return enum_cls(value).value
    except ValueError as exc:
        allowed = ", ".join(v.value for v in enum_cls)
        raise ValidationError(f"Invalid {field} '{value}'. Must be one of: {allowed}") from exc


def ensure_weight(weight) -> Decimal:
    try:
        value = Decimal(str(weight))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError("weight must be a number") from exc
    if not value.is_finite() or value <= 0:
        raise ValidationError("weight must be greater than 0")
    return value


def ensure_weight_date(weight_date: date, today: date) -> date:
    if weight_date > today:
        raise ValidationError("Weighing date cannot be in the future")
    return weight_date


def ensure_unit(unit: str) -> str:
    return _choice(WeightUnit, unit, "unit")


def ensure_purpose(purpose: str) -> str:
    return _choice(WeighingPurpose, purpose, "purpose")


def ensure_method(method: str) -> str:
    return _choice(WeighingMethod, method, "method")
