"""Optimistic concurrency guard shared by every mutating use case.

Mutations carry the version the caller last read. Repositories apply them as a single
compare-and-swap ``UPDATE ... WHERE version = :expected`` and return ``None`` when no row
matched; the guard then re-reads the row to tell a missing entity from a stale version.
Nothing here retries or merges.
"""

from __future__ import annotations

from typing import Any, Protocol, TypeVar
from uuid import UUID

from herdbook.application.errors import AppError, ConflictError, NotFound, ValidationError

T = TypeVar("T")


class VersionedRepository(Protocol[T]):
    async def get(self, farm_id: UUID, entity_id: UUID) -> T | None: ...

    async def update(
        self, farm_id: UUID, entity_id: UUID, data: dict, expected_version: int
    ) -> T | None: ...

    async def delete(self, farm_id: UUID, entity_id: UUID, expected_version: int) -> bool: ...


def ensure_version(expected_version: int | None) -> int:
    if expected_version is None or isinstance(expected_version, bool) or expected_version < 1:
        raise ValidationError("Invalid version value")
    return expected_version


def version_conflict(
    entity: str, entity_id: UUID, expected_version: int, current_version: int
) -> ConflictError:
    return ConflictError(
        f"Version mismatch while updating {entity}",
        details={
            "entity": entity,
            "id": str(entity_id),
            "expected_version": expected_version,
            "current_version": current_version,
        },
    )


def check_version(current: Any, expected_version: int, *, entity: str) -> None:
    """Validate `expected_version` against an already loaded entity."""
    ensure_version(expected_version)
    if current.version != expected_version:
        raise version_conflict(entity, current.id, expected_version, current.version)


async def _mismatch(
    repo: VersionedRepository[Any],
    farm_id: UUID,
    entity_id: UUID,
    expected_version: int,
    entity: str,
) -> AppError:
    current = await repo.get(farm_id, entity_id)
    if current is None:
        return NotFound(f"{entity.capitalize()} not found")
    return version_conflict(entity, entity_id, expected_version, current.version)


async def apply_versioned_update(
    repo: VersionedRepository[T],
    farm_id: UUID,
    entity_id: UUID,
    data: dict,
    expected_version: int,
    *,
    entity: str,
) -> T:
    ensure_version(expected_version)
    updated = await repo.update(
        farm_id, entity_id, data=data, expected_version=expected_version
    )
    if updated is None:
        raise await _mismatch(repo, farm_id, entity_id, expected_version, entity)
    return updated


async def apply_versioned_delete(
    repo: VersionedRepository[Any],
    farm_id: UUID,
    entity_id: UUID,
    expected_version: int,
    *,
    entity: str,
) -> None:
    ensure_version(expected_version)
    deleted = await repo.delete(farm_id, entity_id, expected_version=expected_version)
    if not deleted:
        raise await _mismatch(repo, farm_id, entity_id, expected_version, entity)
