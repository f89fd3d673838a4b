from __future__ import annotations

from datetime import date
from types import SimpleNamespace
from uuid import uuid4

import pytest

from herdbook.application.errors import (
    ConflictError,
    DependencyError,
    NotFound,
    ValidationError,
)
from herdbook.application.pagination import PageParams
from herdbook.application.use_cases.animals import (
    delete_animal,
    list_animals,
    register_animal,
    update_animal,
)
from herdbook.domain.models.animal import Animal

TODAY = date(2025, 6, 1)


class StubAnimals:
    def __init__(self, existing: Animal | None = None) -> None:
        self.existing = existing
        self.added: list[Animal] = []
        self.updates: list[dict] = []
        self.deleted = False
        self.offspring = 0

    async def add(self, animal: Animal) -> Animal:
        self.added.append(animal)
        return animal

    async def get(self, farm_id, animal_id):
        if self.existing and self.existing.id == animal_id:
            return self.existing
        return None

    async def list(self, farm_id, **kwargs):
        return [self.existing] if self.existing else []

    async def count(self, farm_id, **kwargs):
        return 1 if self.existing else 0

    async def update(self, farm_id, animal_id, data, expected_version):
        self.updates.append(data)
        return None

    async def delete(self, farm_id, animal_id, expected_version):
        self.deleted = True
        return True

    async def count_offspring(self, farm_id, animal_id):
        return self.offspring


class StubCounter:
    def __init__(self, count: int = 0) -> None:
        self.count = count

    async def count_for_animal(self, farm_id, animal_id):
        return self.count


def make_uow(animals: StubAnimals, *, movements: int = 0, weighings: int = 0):
    commits: list[bool] = []

    async def commit():
        commits.append(True)

    async def rollback():
        return None

    return SimpleNamespace(
        animals=animals,
        movements=StubCounter(movements),
        weighings=StubCounter(weighings),
        treatments=StubCounter(),
        lot_memberships=StubCounter(),
        commit=commit,
        rollback=rollback,
        commits=commits,
    )


def make_animal(**kwargs) -> Animal:
    values = {"farm_id": uuid4(), "species_id": "bovine", "sex": "female", "visual_id": "V-1"}
    values.update(kwargs)
    return Animal.create(**values)


async def test_register_requires_an_identifier():
    animals = StubAnimals()
    uow = make_uow(animals)
    with pytest.raises(ValidationError):
        await register_animal.execute(
            uow,
            uuid4(),
            register_animal.RegisterAnimalInput(species_id="bovine", sex="female", name="Bella"),
            today=TODAY,
        )
    assert not animals.added
    assert not uow.commits


async def test_register_rejects_future_birth_date():
    uow = make_uow(StubAnimals())
    with pytest.raises(ValidationError):
        await register_animal.execute(
            uow,
            uuid4(),
            register_animal.RegisterAnimalInput(
                species_id="bovine", sex="male", visual_id="V-9", birth_date=date(2025, 6, 2)
            ),
            today=TODAY,
        )


async def test_register_rejects_male_mother():
    bull = make_animal(sex="male")
    uow = make_uow(StubAnimals(bull))
    with pytest.raises(ValidationError):
        await register_animal.execute(
            uow,
            bull.farm_id,
            register_animal.RegisterAnimalInput(
                species_id="bovine", sex="female", visual_id="C-1", mother_id=bull.id
            ),
            today=TODAY,
        )


async def test_register_unknown_father_is_not_found():
    uow = make_uow(StubAnimals())
    with pytest.raises(NotFound):
        await register_animal.execute(
            uow,
            uuid4(),
            register_animal.RegisterAnimalInput(
                species_id="bovine", sex="female", visual_id="C-2", father_id=uuid4()
            ),
            today=TODAY,
        )


async def test_register_strips_identifiers_and_commits():
    animals = StubAnimals()
    uow = make_uow(animals)
    created = await register_animal.execute(
        uow,
        uuid4(),
        register_animal.RegisterAnimalInput(species_id="bovine", sex="female", visual_id=" V-7 "),
        today=TODAY,
    )
    assert created.visual_id == "V-7"
    assert created.status == "alive"
    assert uow.commits


async def test_list_validates_limit():
    uow = make_uow(StubAnimals())
    with pytest.raises(ValidationError):
        await list_animals.execute(uow, uuid4(), PageParams(limit=0))
    with pytest.raises(ValidationError):
        await list_animals.execute(uow, uuid4(), PageParams(limit=101), max_limit=100)


async def test_list_rejects_unknown_sort_field():
    uow = make_uow(StubAnimals())
    with pytest.raises(ValidationError):
        await list_animals.execute(uow, uuid4(), PageParams(sort_by="password"))


async def test_update_conflict_raises_with_current_version():
    existing = make_animal()
    existing.version = 2
    uow = make_uow(StubAnimals(existing))
    with pytest.raises(ConflictError) as exc_info:
        await update_animal.execute(
            uow,
            existing.farm_id,
            existing.id,
            update_animal.UpdateAnimalInput(version=1, name="New"),
            today=TODAY,
        )
    assert exc_info.value.details["current_version"] == existing.version
    assert not uow.commits


async def test_update_cannot_clear_last_identifier():
    existing = make_animal()
    uow = make_uow(StubAnimals(existing))
    with pytest.raises(ValidationError):
        await update_animal.execute(
            uow,
            existing.farm_id,
            existing.id,
            update_animal.UpdateAnimalInput(version=1, visual_id=""),
            today=TODAY,
        )


async def test_status_edit_rejected_once_movements_exist():
    existing = make_animal()
    animals = StubAnimals(existing)
    uow = make_uow(animals, movements=2)
    with pytest.raises(ValidationError) as exc_info:
        await update_animal.execute(
            uow,
            existing.farm_id,
            existing.id,
            update_animal.UpdateAnimalInput(version=1, status="sold"),
            today=TODAY,
        )
    assert exc_info.value.details == {"field": "status"}
    assert not animals.updates


async def test_delete_blocked_by_dependencies():
    existing = make_animal()
    animals = StubAnimals(existing)
    animals.offspring = 1
    uow = make_uow(animals, weighings=3)
    with pytest.raises(DependencyError) as exc_info:
        await delete_animal.execute(uow, existing.farm_id, existing.id, 1)
    assert exc_info.value.dependencies == {"weighings": 3, "offspring": 1}
    assert not animals.deleted


async def test_delete_with_stale_version_conflicts():
    existing = make_animal()
    existing.version = 3
    animals = StubAnimals(existing)
    uow = make_uow(animals)
    with pytest.raises(ConflictError):
        await delete_animal.execute(uow, existing.farm_id, existing.id, 2)
    assert not animals.deleted


async def test_delete_without_dependencies_commits():
    existing = make_animal()
    animals = StubAnimals(existing)
    uow = make_uow(animals)
    await delete_animal.execute(uow, existing.farm_id, existing.id, 1)
    assert animals.deleted
    assert uow.commits
