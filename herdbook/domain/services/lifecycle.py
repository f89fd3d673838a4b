"""Status projection over an animal's movement history.

Status is never edited directly once movements exist: it is the fold of the
animal's movements, where the latest state-changing movement wins.
"""

from __future__ import annotations

from collections.abc import Iterable

from herdbook.domain.models.movement_event import MovementEvent
from herdbook.domain.value_objects.animal_status import AnimalStatus
from herdbook.domain.value_objects.movement_type import ExitReason, MovementType

_EXIT_STATUSES = {
    ExitReason.SLAUGHTER.value: AnimalStatus.SLAUGHTERED,
    ExitReason.MISSING.value: AnimalStatus.MISSING,
}


def implied_status(event: MovementEvent) -> AnimalStatus | None:
    """Status a movement puts the animal in, or None for status-neutral movements."""
    movement_type = MovementType(event.type)
    if movement_type is MovementType.DEATH:
        return AnimalStatus.DEAD
    if movement_type is MovementType.SALE:
        return AnimalStatus.SOLD
    if movement_type is MovementType.EXIT:
        return _EXIT_STATUSES.get((event.payload or {}).get("reason"))
    if movement_type.is_arrival:
        return AnimalStatus.ALIVE
    return None


def ordered(events: Iterable[MovementEvent]) -> list[MovementEvent]:
    return sorted(events, key=lambda e: e.sort_key)


def project_status(events: Iterable[MovementEvent]) -> AnimalStatus:
    status = AnimalStatus.ALIVE
    for event in ordered(events):
        implied = implied_status(event)
        if implied is not None:
            status = implied
    return status


def is_temporarily_out(events: Iterable[MovementEvent]) -> bool:
    out = False
    for event in ordered(events):
        if event.type == MovementType.TEMPORARY_OUT.value:
            out = True
        elif event.type == MovementType.TEMPORARY_RETURN.value:
            out = False
    return out
