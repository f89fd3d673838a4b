from __future__ import annotations

from enum import Enum


class LotType(str, Enum):
    TREATMENT = "treatment"
    VACCINATION = "vaccination"
    SALE = "sale"
    SLAUGHTER = "slaughter"
    PURCHASE = "purchase"
    BREEDING = "breeding"
    REPRODUCTION = "reproduction"
    FATTENING = "fattening"
    QUARANTINE = "quarantine"
    WEANING = "weaning"
    GESTATION = "gestation"
    LACTATION = "lactation"
    BIRTH = "birth"
    PRODUCTION = "production"
    OTHER = "other"


class LotStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"
    COMPLETED = "completed"
    ARCHIVED = "archived"

    @property
    def is_terminal(self) -> bool:
        return self is not LotStatus.OPEN
