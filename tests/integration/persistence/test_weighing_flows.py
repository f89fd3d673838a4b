from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal
from uuid import uuid4

import pytest

from herdbook.application.errors import ConflictError, NotFound, ValidationError
from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.animals import register_animal
from herdbook.application.use_cases.weighings import (
    compute_growth,
    delete_weighing,
    get_weighing,
    is_overdue,
    list_weighings,
    record_weighing,
    update_weighing,
    weight_history,
)

TODAY = date(2025, 6, 1)
DAY0 = date(2025, 3, 1)


async def register(uow_factory, farm_id):
    async with uow_factory() as uow:
        return await register_animal.execute(
            uow,
            farm_id,
            register_animal.RegisterAnimalInput(species_id="bovine", sex="male", visual_id="W-1"),
            today=TODAY,
        )


async def weigh(uow_factory, farm_id, animal_id, weight: str, day: date, **kwargs):
    async with uow_factory() as uow:
        return await record_weighing.execute(
            uow,
            farm_id,
            record_weighing.RecordWeighingInput(
                animal_id=animal_id, weight=Decimal(weight), weight_date=day, **kwargs
            ),
            today=TODAY,
        )


async def test_growth_between_two_weighings(uow_factory, farm_id):
    steer = await register(uow_factory, farm_id)
    async with uow_factory() as uow:
        assert await compute_growth.execute(uow, farm_id, steer.id) is None

    await weigh(uow_factory, farm_id, steer.id, "100", DAY0)
    await weigh(uow_factory, farm_id, steer.id, "112", DAY0 + timedelta(days=10))

    async with uow_factory() as uow:
        growth = await compute_growth.execute(uow, farm_id, steer.id)
        history = await weight_history.execute(uow, farm_id, steer.id)
    assert growth.daily_gain_kg == Decimal("1.2")
    assert growth.days == 10
    assert [entry.weighing.weight_date for entry in history] == [
        DAY0,
        DAY0 + timedelta(days=10),
    ]
    assert history[1].weight_gain_kg == Decimal("12")


async def test_weighing_validation(uow_factory, farm_id):
    steer = await register(uow_factory, farm_id)
    with pytest.raises(ValidationError):
        await weigh(uow_factory, farm_id, steer.id, "0", DAY0)
    with pytest.raises(ValidationError):
        await weigh(uow_factory, farm_id, steer.id, "100", TODAY + timedelta(days=1))
    with pytest.raises(ValidationError):
        await weigh(uow_factory, farm_id, steer.id, "100", DAY0, unit="stone")
    with pytest.raises(NotFound):
        await weigh(uow_factory, farm_id, uuid4(), "100", DAY0)


async def test_overdue_uses_latest_weighing(uow_factory, farm_id):
    steer = await register(uow_factory, farm_id)
    async with uow_factory() as uow:
        never = await is_overdue.execute(uow, farm_id, steer.id, today=TODAY)
    assert never.overdue
    assert never.last_weight_date is None

    await weigh(uow_factory, farm_id, steer.id, "250", TODAY - timedelta(days=20))
    async with uow_factory() as uow:
        fresh = await is_overdue.execute(uow, farm_id, steer.id, today=TODAY)
        strict = await is_overdue.execute(uow, farm_id, steer.id, threshold_days=7, today=TODAY)
    assert not fresh.overdue
    assert fresh.days_since_last == 20
    assert strict.overdue


async def test_update_and_delete_are_versioned(uow_factory, farm_id):
    steer = await register(uow_factory, farm_id)
    created = await weigh(uow_factory, farm_id, steer.id, "300", DAY0, purpose="sale")

    async with uow_factory() as uow:
        updated = await update_weighing.execute(
            uow,
            farm_id,
            created.id,
            update_weighing.UpdateWeighingInput(version=1, weight=Decimal("305.5")),
            today=TODAY,
        )
    assert updated.weight == Decimal("305.5")
    assert updated.version == 2

    with pytest.raises(ConflictError):
        async with uow_factory() as uow:
            await delete_weighing.execute(uow, farm_id, created.id, 1)

    async with uow_factory() as uow:
        page = await list_weighings.execute(uow, farm_id, PageParams(), purpose="sale")
    assert page.total == 1

    async with uow_factory() as uow:
        await delete_weighing.execute(uow, farm_id, created.id, 2)
    with pytest.raises(NotFound):
        async with uow_factory() as uow:
            await get_weighing.execute(uow, farm_id, created.id)
