from __future__ import annotations

from enum import Enum


class TreatmentType(str, Enum):
    TREATMENT = "treatment"
    VACCINATION = "vaccination"


class WithdrawalMetric(str, Enum):
    MEAT = "meat"
    MILK = "milk"
