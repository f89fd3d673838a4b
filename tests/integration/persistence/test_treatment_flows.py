from __future__ import annotations

from datetime import date

import pytest

from herdbook.application.errors import DependencyError, ValidationError
from herdbook.application.use_cases.animals import delete_animal, register_animal
from herdbook.application.use_cases.treatments import (
    check_withdrawal,
    record_treatment,
    update_treatment,
)

TODAY = date(2025, 6, 1)


async def register(uow_factory, farm_id):
    async with uow_factory() as uow:
        return await register_animal.execute(
            uow,
            farm_id,
            register_animal.RegisterAnimalInput(species_id="bovine", sex="female", visual_id="T-1"),
            today=TODAY,
        )


async def treat(uow_factory, farm_id, animal_id, day: date, **kwargs):
    async with uow_factory() as uow:
        return await record_treatment.execute(
            uow,
            farm_id,
            record_treatment.RecordTreatmentInput(
                animal_id=animal_id, treatment_date=day, **kwargs
            ),
            today=TODAY,
        )


async def withdrawal(uow_factory, farm_id, animal_id, as_of: date, metric: str = "meat"):
    async with uow_factory() as uow:
        return await check_withdrawal.execute(
            uow, farm_id, animal_id, metric=metric, as_of=as_of
        )


async def test_withdrawal_from_catalog_product(uow_factory, farm_id, seed_product):
    await seed_product("OXY-20", "Oxytetracycline 20%", meat_days=12, milk_hours=96)
    cow = await register(uow_factory, farm_id)

    result = await treat(uow_factory, farm_id, cow.id, date(2025, 1, 1), product_id="OXY-20")
    assert result.warnings == []
    assert result.treatment.product_name == "Oxytetracycline 20%"
    assert result.treatment.withdrawal_meat_until == date(2025, 1, 13)
    assert result.treatment.withdrawal_milk_until == date(2025, 1, 5)

    during = await withdrawal(uow_factory, farm_id, cow.id, date(2025, 1, 10))
    after = await withdrawal(uow_factory, farm_id, cow.id, date(2025, 1, 14))
    milk = await withdrawal(uow_factory, farm_id, cow.id, date(2025, 1, 10), "milk")
    assert during.under_withdrawal
    assert during.until == date(2025, 1, 13)
    assert during.treatment_id == result.treatment.id
    assert not after.under_withdrawal
    assert not milk.under_withdrawal


async def test_unknown_product_records_with_warning(uow_factory, farm_id):
    cow = await register(uow_factory, farm_id)
    result = await treat(uow_factory, farm_id, cow.id, date(2025, 2, 1), product_id="NOPE")
    assert result.treatment.withdrawal_meat_until is None
    assert result.treatment.withdrawal_milk_until is None
    assert len(result.warnings) == 1

    status = await withdrawal(uow_factory, farm_id, cow.id, date(2025, 2, 2))
    assert not status.under_withdrawal


async def test_manual_override_and_date_change(uow_factory, farm_id, seed_product):
    await seed_product("PEN", "Penicillin", meat_days=5)
    cow = await register(uow_factory, farm_id)
    result = await treat(
        uow_factory,
        farm_id,
        cow.id,
        date(2025, 3, 1),
        product_id="PEN",
        withdrawal_end_date=date(2025, 3, 20),
    )
    milk = await withdrawal(uow_factory, farm_id, cow.id, date(2025, 3, 15), "milk")
    assert milk.under_withdrawal
    assert milk.until == date(2025, 3, 20)

    async with uow_factory() as uow:
        moved = await update_treatment.execute(
            uow,
            farm_id,
            result.treatment.id,
            update_treatment.UpdateTreatmentInput(version=1, treatment_date=date(2025, 3, 3)),
            today=TODAY,
        )
    assert moved.treatment.withdrawal_meat_until == date(2025, 3, 8)
    assert moved.treatment.version == 2


async def test_override_cannot_precede_treatment(uow_factory, farm_id):
    cow = await register(uow_factory, farm_id)
    with pytest.raises(ValidationError):
        await treat(
            uow_factory, farm_id, cow.id, date(2025, 3, 1), withdrawal_end_date=date(2025, 2, 1)
        )


async def test_treated_animal_cannot_be_deleted(uow_factory, farm_id):
    cow = await register(uow_factory, farm_id)
    await treat(uow_factory, farm_id, cow.id, date(2025, 3, 1), type="vaccination")
    with pytest.raises(DependencyError) as exc_info:
        async with uow_factory() as uow:
            await delete_animal.execute(uow, farm_id, cow.id, cow.version)
    assert exc_info.value.dependencies == {"treatments": 1}
