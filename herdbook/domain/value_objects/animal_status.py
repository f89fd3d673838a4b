from __future__ import annotations

from enum import Enum


class AnimalStatus(str, Enum):
    ALIVE = "alive"
    SOLD = "sold"
    SLAUGHTERED = "slaughtered"
    DEAD = "dead"
    MISSING = "missing"

    @property
    def is_terminal(self) -> bool:
        return self is not AnimalStatus.ALIVE


class AnimalSex(str, Enum):
    MALE = "male"
    FEMALE = "female"
