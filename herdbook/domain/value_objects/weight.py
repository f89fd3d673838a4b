from __future__ import annotations

from decimal import Decimal
from enum import Enum

KG_PER_LB = Decimal("0.45359237")


class WeightUnit(str, Enum):
    KG = "kg"
    LB = "lb"

    def to_kg(self, value: Decimal) -> Decimal:
        if self is WeightUnit.LB:
            return value * KG_PER_LB
        return value


class WeighingPurpose(str, Enum):
    ROUTINE = "routine"
    BIRTH = "birth"
    WEANING = "weaning"
    SALE = "sale"
    PURCHASE = "purchase"
    HEALTH = "health"
    OTHER = "other"


class WeighingMethod(str, Enum):
    MANUAL = "manual"
    SCALE = "scale"
    ESTIMATED = "estimated"
    AUTOMATIC = "automatic"
    WEIGHBRIDGE = "weighbridge"
