"""Append a movement event and apply its consequences.

Everything is validated before the first write: a rejected event leaves no trace. The
event, the per-animal snapshots, the re-projected statuses and version bumps, and the lot
membership changes are staged in the same unit of work and committed together.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID

from herdbook.application.concurrency import apply_versioned_update
from herdbook.application.errors import NotFound, ValidationError
from herdbook.application.interfaces.unit_of_work import UnitOfWork
from herdbook.domain.models.animal import Animal
from herdbook.domain.models.lot import Lot, LotMembership
from herdbook.domain.models.movement_event import MovementAnimal, MovementEvent
from herdbook.domain.models.movement_payloads import (
    InvalidPayload,
    MovementPayload,
    dump_payload,
    parse_movement_type,
    parse_payload,
    target_lot_id,
)
from herdbook.domain.services.lifecycle import implied_status, is_temporarily_out, project_status
from herdbook.domain.value_objects.movement_type import MovementType
from herdbook.utils.datetime_tz import today_local

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class RecordEventInput:
    type: str
    animal_ids: list[UUID]
    movement_date: date
    payload: dict | None = None
    notes: str | None = None


@dataclass(slots=True)
class RecordEventOutput:
    event: MovementEvent
    animals: list[Animal]
    status_changes: dict[UUID, str] = field(default_factory=dict)
    lots_left: dict[UUID, list[UUID]] = field(default_factory=dict)
    lot_joined: UUID | None = None


def _parse(payload: RecordEventInput) -> tuple[MovementType, MovementPayload]:
    try:
        movement_type = parse_movement_type(payload.type)
        return movement_type, parse_payload(movement_type, payload.payload)
    except InvalidPayload as exc:
        details = {"errors": exc.errors} if exc.errors else None
        raise ValidationError(str(exc), details=details) from exc


def _check_movement(
    movement_type: MovementType,
    candidate: MovementEvent,
    animal: Animal,
    history: list[MovementEvent],
) -> None:
    label = animal.display_id
    if animal.is_terminal:
        raise ValidationError(
            f"Animal {label} is {animal.status}; no further movements can be recorded",
            details={"animal_id": str(animal.id), "status": animal.status},
        )
    if movement_type is MovementType.BIRTH:
        if history:
            raise ValidationError(
                f"Birth can only be the first movement of animal {label}",
                details={"animal_id": str(animal.id)},
            )
        if animal.mother_id is None:
            raise ValidationError(
                f"Birth requires animal {label} to reference its mother",
                details={"animal_id": str(animal.id)},
            )
    elif movement_type is MovementType.TEMPORARY_OUT and is_temporarily_out(history):
        raise ValidationError(
            f"Animal {label} is already temporarily out",
            details={"animal_id": str(animal.id)},
        )
    elif movement_type is MovementType.TEMPORARY_RETURN and not is_temporarily_out(history):
        raise ValidationError(
            f"Animal {label} has no open temporary exit to return from",
            details={"animal_id": str(animal.id)},
        )
    implied = implied_status(candidate)
    chronological = movement_type.is_temporary or (implied is not None and implied.is_terminal)
    if chronological and history:
        latest = max(e.movement_date for e in history)
        if candidate.movement_date < latest:
            raise ValidationError(
                f"A {movement_type.value} of animal {label} cannot predate its latest "
                f"movement ({latest.isoformat()})",
                details={"animal_id": str(animal.id), "latest_movement_date": latest.isoformat()},
            )


async def _target_lot(uow: UnitOfWork, farm_id: UUID, lot_id: UUID | None) -> Lot | None:
    if lot_id is None:
        return None
    lot = await uow.lots.get(farm_id, lot_id)
    if not lot:
        raise NotFound("Lot not found", details={"lot_id": str(lot_id)})
    if not lot.is_open:
        raise ValidationError(f"Lot '{lot.name}' is {lot.status} and cannot receive animals")
    return lot


async def record(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordEventInput,
    *,
    today: date,
) -> RecordEventOutput:
    """Validate and stage the event without committing."""
    movement_type, parsed = _parse(payload)
    animal_ids = list(dict.fromkeys(payload.animal_ids or []))
    if not animal_ids:
        raise ValidationError("At least one animal is required")
    if payload.movement_date > today:
        raise ValidationError("Movement date cannot be in the future")

    found = {a.id: a for a in await uow.animals.get_many(farm_id, animal_ids)}
    missing = [str(i) for i in animal_ids if i not in found]
    if missing:
        raise NotFound("Animal not found", details={"missing_ids": missing})
    animals = [found[i] for i in animal_ids]
    lot = await _target_lot(uow, farm_id, target_lot_id(parsed))

    event = MovementEvent.create(
        farm_id=farm_id,
        type=movement_type.value,
        movement_date=payload.movement_date,
        animal_ids=animal_ids,
        payload=dump_payload(parsed),
        notes=payload.notes,
    )
    histories: dict[UUID, list[MovementEvent]] = {}
    for animal in animals:
        history = await uow.movements.list_for_animal(farm_id, animal.id)
        _check_movement(movement_type, event, animal, history)
        histories[animal.id] = history

    snapshots = [MovementAnimal.snapshot(event.id, a) for a in animals]
    saved = await uow.movements.add(event, snapshots)
    output = RecordEventOutput(event=saved, animals=[])
    now = datetime.now(timezone.utc)

    for animal in animals:
        status = project_status([*histories[animal.id], saved])
        changes: dict = {}
        if status.value != animal.status:
            changes = {
                "status": status.value,
                "status_changed_at": saved.movement_date if status.is_terminal else None,
            }
        # Every movement bumps the version: a concurrent movement on the same animal
        # fails the compare-and-swap.
        animal = await apply_versioned_update(
            uow.animals, farm_id, animal.id, changes, animal.version, entity="animal"
        )
        if changes:
            output.status_changes[animal.id] = status.value
            logger.info(
                "Animal status projected: id=%s status=%s movement=%s",
                animal.id,
                status.value,
                saved.id,
            )
        if movement_type.leaves_lots:
            left = await uow.lot_memberships.close_open_lot_memberships(farm_id, animal.id, now)
            if left:
                output.lots_left[animal.id] = left
        if lot is not None and not await uow.lot_memberships.get_active(
            farm_id, lot.id, animal.id
        ):
            await uow.lot_memberships.add(LotMembership.create(farm_id, lot.id, animal.id))
        output.animals.append(animal)

    output.lot_joined = lot.id if lot is not None else None
    logger.info(
        "Movement recorded: id=%s type=%s animals=%d farm=%s",
        saved.id,
        saved.type,
        len(animals),
        farm_id,
    )
    return output


async def execute(
    uow: UnitOfWork,
    farm_id: UUID,
    payload: RecordEventInput,
    *,
    today: date | None = None,
) -> RecordEventOutput:
    output = await record(uow, farm_id, payload, today=today or today_local())
    await uow.commit()
    return output
