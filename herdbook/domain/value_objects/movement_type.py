from __future__ import annotations

from enum import Enum


class MovementType(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"
    BIRTH = "birth"
    DEATH = "death"
    SALE = "sale"
    PURCHASE = "purchase"
    TRANSFER_IN = "transfer_in"
    TRANSFER_OUT = "transfer_out"
    TEMPORARY_OUT = "temporary_out"
    TEMPORARY_RETURN = "temporary_return"

    @property
    def leaves_lots(self) -> bool:
        """Movements that take the animal out of every open lot."""
        return self in _LEAVES_LOTS

    @property
    def is_arrival(self) -> bool:
        return self in _ARRIVALS

    @property
    def is_temporary(self) -> bool:
        return self in (MovementType.TEMPORARY_OUT, MovementType.TEMPORARY_RETURN)


_LEAVES_LOTS = frozenset(
    {
        MovementType.EXIT,
        MovementType.DEATH,
        MovementType.SALE,
        MovementType.TRANSFER_OUT,
        MovementType.TEMPORARY_OUT,
    }
)

_ARRIVALS = frozenset(
    {
        MovementType.ENTRY,
        MovementType.BIRTH,
        MovementType.PURCHASE,
        MovementType.TRANSFER_IN,
    }
)


class ExitReason(str, Enum):
    SLAUGHTER = "slaughter"
    MISSING = "missing"
    OTHER = "other"


class TemporaryType(str, Enum):
    PASTURE = "pasture"
    VETERINARY = "veterinary"
    EXHIBITION = "exhibition"
    BREEDING = "breeding"
    OTHER = "other"
