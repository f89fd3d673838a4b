from __future__ import annotations

import asyncio
from datetime import date

import pytest

from herdbook.application.errors import ConflictError, NotFound, ValidationError
from herdbook.application.use_cases.animals import register_animal
from herdbook.application.use_cases.lots import (
    add_animal,
    close_lot,
    create_lot,
    get_lot,
    list_animal_lots,
    list_lot_animals,
    remove_animal,
    update_lot,
)
from herdbook.application.use_cases.movements import record_event
from herdbook.domain.models.lot import LotMembership

TODAY = date(2025, 6, 1)


async def register(uow_factory, farm_id, visual_id: str):
    async with uow_factory() as uow:
        return await register_animal.execute(
            uow,
            farm_id,
            register_animal.RegisterAnimalInput(
                species_id="bovine", sex="female", visual_id=visual_id
            ),
            today=TODAY,
        )


async def new_lot(uow_factory, farm_id, name: str, type_: str = "treatment"):
    async with uow_factory() as uow:
        return await create_lot.execute(
            uow, farm_id, create_lot.CreateLotInput(name=name, type=type_)
        )


async def join(uow_factory, farm_id, lot_id, animal_id):
    async with uow_factory() as uow:
        return await add_animal.execute(uow, farm_id, lot_id, animal_id)


async def members(uow_factory, farm_id, lot_id, **kwargs):
    async with uow_factory() as uow:
        items = await list_lot_animals.execute(uow, farm_id, lot_id, **kwargs)
    return {item.animal.id for item in items}


async def test_temporary_out_leaves_open_lots(uow_factory, farm_id):
    a = await register(uow_factory, farm_id, "A")
    b = await register(uow_factory, farm_id, "B")
    lot = await new_lot(uow_factory, farm_id, "Mastitis batch")
    await join(uow_factory, farm_id, lot.id, a.id)
    await join(uow_factory, farm_id, lot.id, b.id)

    async with uow_factory() as uow:
        out = await record_event.execute(
            uow,
            farm_id,
            record_event.RecordEventInput(
                type="temporary_out",
                animal_ids=[a.id],
                movement_date=date(2025, 5, 1),
                payload={"temporaryType": "veterinary"},
            ),
            today=TODAY,
        )
    assert out.lots_left == {a.id: [lot.id]}
    assert await members(uow_factory, farm_id, lot.id) == {b.id}
    assert await members(uow_factory, farm_id, lot.id, include_history=True) == {a.id, b.id}

    async with uow_factory() as uow:
        back = await record_event.execute(
            uow,
            farm_id,
            record_event.RecordEventInput(
                type="temporary_return",
                animal_ids=[a.id],
                movement_date=date(2025, 5, 3),
                payload={"lotId": str(lot.id)},
            ),
            today=TODAY,
        )
    assert back.lot_joined == lot.id
    assert await members(uow_factory, farm_id, lot.id) == {a.id, b.id}

    async with uow_factory() as uow:
        history = await list_animal_lots.execute(uow, farm_id, a.id)
    assert len(history) == 2
    assert sum(1 for item in history if item.membership.left_at is None) == 1


async def test_lot_membership_rules(uow_factory, farm_id):
    a = await register(uow_factory, farm_id, "A")
    lot = await new_lot(uow_factory, farm_id, "Weaning 2025", "weaning")
    await join(uow_factory, farm_id, lot.id, a.id)
    with pytest.raises(ConflictError):
        await join(uow_factory, farm_id, lot.id, a.id)

    async with uow_factory() as uow:
        fetched = await get_lot.execute(uow, farm_id, lot.id)
    assert fetched.animal_count == 1

    async with uow_factory() as uow:
        await remove_animal.execute(uow, farm_id, lot.id, a.id)
    with pytest.raises(NotFound):
        async with uow_factory() as uow:
            await remove_animal.execute(uow, farm_id, lot.id, a.id)
    assert await members(uow_factory, farm_id, lot.id) == set()


async def test_lot_names_are_unique_ignoring_case(uow_factory, farm_id):
    await new_lot(uow_factory, farm_id, "Sale March")
    with pytest.raises(ConflictError):
        await new_lot(uow_factory, farm_id, "sale march", "sale")


async def test_closed_lot_rejects_animals_and_reclosing(uow_factory, farm_id):
    a = await register(uow_factory, farm_id, "A")
    lot = await new_lot(uow_factory, farm_id, "Vaccination May", "vaccination")
    await join(uow_factory, farm_id, lot.id, a.id)

    with pytest.raises(ValidationError):
        async with uow_factory() as uow:
            await close_lot.execute(
                uow, farm_id, lot.id, close_lot.CloseLotInput(version=1, status="open")
            )

    async with uow_factory() as uow:
        closed = await close_lot.execute(
            uow, farm_id, lot.id, close_lot.CloseLotInput(version=1, status="completed")
        )
    assert closed.status == "completed"
    assert closed.closed_at is not None
    assert closed.version == 2
    # Memberships remain as history
    assert await members(uow_factory, farm_id, lot.id) == {a.id}

    b = await register(uow_factory, farm_id, "B")
    with pytest.raises(ValidationError):
        await join(uow_factory, farm_id, lot.id, b.id)
    with pytest.raises(ValidationError):
        async with uow_factory() as uow:
            await close_lot.execute(uow, farm_id, lot.id, close_lot.CloseLotInput(version=2))


async def test_update_lot_with_stale_version(uow_factory, farm_id):
    lot = await new_lot(uow_factory, farm_id, "Fattening")
    async with uow_factory() as uow:
        renamed = await update_lot.execute(
            uow, farm_id, lot.id, update_lot.UpdateLotInput(version=1, name="Fattening A")
        )
    assert renamed.name == "Fattening A"
    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await update_lot.execute(
                uow, farm_id, lot.id, update_lot.UpdateLotInput(version=1, notes="late")
            )


async def test_concurrent_adds_keep_one_active_membership(uow_factory, farm_id):
    cow = await register(uow_factory, farm_id, "R")
    lot = await new_lot(uow_factory, farm_id, "Vaccination round", "vaccination")

    results = await asyncio.gather(
        join(uow_factory, farm_id, lot.id, cow.id),
        join(uow_factory, farm_id, lot.id, cow.id),
        return_exceptions=True,
    )
    assert len([r for r in results if isinstance(r, LotMembership)]) == 1
    assert len([r for r in results if isinstance(r, ConflictError)]) == 1

    async with uow_factory() as uow:
        active = await uow.lot_memberships.list_for_animal(
            farm_id, cow.id, include_history=False
        )
    assert len(active) == 1

    async with uow_factory() as uow:
        await remove_animal.execute(uow, farm_id, lot.id, cow.id)
    assert await members(uow_factory, farm_id, lot.id) == set()


async def test_second_active_membership_is_rejected_by_the_database(uow_factory, farm_id):
    cow = await register(uow_factory, farm_id, "S")
    lot = await new_lot(uow_factory, farm_id, "Quarantine pen", "quarantine")

    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await uow.lot_memberships.add(LotMembership.create(farm_id, lot.id, cow.id))
            await uow.lot_memberships.add(LotMembership.create(farm_id, lot.id, cow.id))
