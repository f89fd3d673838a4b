from __future__ import annotations

from types import SimpleNamespace
from uuid import uuid4

import pytest

from herdbook.application.concurrency import (
    apply_versioned_delete,
    apply_versioned_update,
    check_version,
    ensure_version,
)
from herdbook.application.errors import ConflictError, NotFound, ValidationError


class StubRepo:
    def __init__(self, current=None, updated=None) -> None:
        self.current = current
        self.updated = updated

    async def get(self, farm_id, entity_id):
        return self.current

    async def update(self, farm_id, entity_id, data, expected_version):
        return self.updated

    async def delete(self, farm_id, entity_id, expected_version):
        return self.updated is not None


@pytest.mark.parametrize("value", [None, 0, -1, True])
def test_ensure_version_rejects_invalid_values(value):
    with pytest.raises(ValidationError):
        ensure_version(value)


def test_check_version_reports_both_versions():
    entity = SimpleNamespace(id=uuid4(), version=4)
    with pytest.raises(ConflictError) as exc_info:
        check_version(entity, 3, entity="lot")
    assert exc_info.value.details == {
        "entity": "lot",
        "id": str(entity.id),
        "expected_version": 3,
        "current_version": 4,
    }


async def test_update_returns_new_row():
    updated = SimpleNamespace(id=uuid4(), version=2)
    result = await apply_versioned_update(
        StubRepo(updated=updated), uuid4(), updated.id, {"name": "x"}, 1, entity="animal"
    )
    assert result is updated


async def test_update_stale_version_is_conflict():
    current = SimpleNamespace(id=uuid4(), version=5)
    with pytest.raises(ConflictError) as exc_info:
        await apply_versioned_update(
            StubRepo(current=current), uuid4(), current.id, {"name": "x"}, 4, entity="animal"
        )
    assert exc_info.value.details["current_version"] == 5


async def test_update_missing_row_is_not_found():
    with pytest.raises(NotFound):
        await apply_versioned_update(StubRepo(), uuid4(), uuid4(), {}, 1, entity="weighing")


async def test_delete_missing_row_is_not_found():
    with pytest.raises(NotFound):
        await apply_versioned_delete(StubRepo(), uuid4(), uuid4(), 1, entity="treatment")
