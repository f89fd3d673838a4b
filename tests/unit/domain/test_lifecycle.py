from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from herdbook.domain.models.movement_event import MovementEvent
from herdbook.domain.services.lifecycle import (
    implied_status,
    is_temporarily_out,
    ordered,
    project_status,
)
from herdbook.domain.value_objects.animal_status import AnimalStatus

FARM = uuid4()
BASE = datetime(2025, 1, 1, tzinfo=timezone.utc)


def event(type_: str, day: date, payload: dict | None = None, *, offset: int = 0) -> MovementEvent:
    evt = MovementEvent.create(
        farm_id=FARM, type=type_, movement_date=day, animal_ids=[uuid4()], payload=payload
    )
    evt.created_at = BASE + timedelta(seconds=offset)
    return evt


def test_no_movements_projects_alive():
    assert project_status([]) is AnimalStatus.ALIVE


def test_sale_projects_sold():
    history = [event("purchase", date(2025, 1, 1)), event("sale", date(2025, 3, 1))]
    assert project_status(history) is AnimalStatus.SOLD


def test_latest_state_changing_event_wins_regardless_of_input_order():
    history = [
        event("death", date(2025, 5, 1)),
        event("entry", date(2025, 1, 1)),
        event("temporary_out", date(2025, 2, 1)),
    ]
    assert project_status(history) is AnimalStatus.DEAD


def test_same_day_events_use_recording_order():
    day = date(2025, 4, 1)
    history = [
        event("transfer_in", day, {"origin_farm_id": "F-2"}, offset=10),
        event("exit", day, {"reason": "missing"}, offset=5),
    ]
    assert project_status(history) is AnimalStatus.ALIVE
    assert [e.type for e in ordered(history)] == ["exit", "transfer_in"]


def test_exit_reason_decides_status():
    assert implied_status(event("exit", date(2025, 1, 1), {"reason": "slaughter"})) is (
        AnimalStatus.SLAUGHTERED
    )
    assert implied_status(event("exit", date(2025, 1, 1), {"reason": "missing"})) is (
        AnimalStatus.MISSING
    )
    assert implied_status(event("exit", date(2025, 1, 1), {"reason": "other"})) is None


def test_status_neutral_movements():
    for type_ in ("transfer_out", "temporary_out", "temporary_return"):
        assert implied_status(event(type_, date(2025, 1, 1))) is None


def test_temporarily_out_tracks_last_out_or_return():
    out = event("temporary_out", date(2025, 1, 1), offset=1)
    back = event("temporary_return", date(2025, 1, 5), offset=2)
    again = event("temporary_out", date(2025, 2, 1), offset=3)
    assert not is_temporarily_out([])
    assert is_temporarily_out([out])
    assert not is_temporarily_out([back, out])
    assert is_temporarily_out([out, back, again])
