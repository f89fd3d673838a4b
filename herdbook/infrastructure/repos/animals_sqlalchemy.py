from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import ConflictError, InfrastructureError
from herdbook.application.interfaces.repositories.animals import AnimalRepository
from herdbook.domain.models.animal import Animal
from herdbook.infrastructure.db.orm.animal import AnimalORM
from herdbook.infrastructure.db.orm.lot import LotMembershipORM
from herdbook.utils.datetime_tz import ensure_utc

_SORT_COLUMNS = {
    "created_at": AnimalORM.created_at,
    "updated_at": AnimalORM.updated_at,
    "official_number": AnimalORM.official_number,
    "visual_id": AnimalORM.visual_id,
    "name": AnimalORM.name,
    "birth_date": AnimalORM.birth_date,
    "status": AnimalORM.status,
}


class AnimalsSQLAlchemyRepository(AnimalRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: AnimalORM) -> Animal:
        return Animal(
            id=orm.id,
            farm_id=orm.farm_id,
            species_id=orm.species_id,
            sex=orm.sex,
            official_number=orm.official_number,
            visual_id=orm.visual_id,
            current_eid=orm.current_eid,
            name=orm.name,
            breed_id=orm.breed_id,
            birth_date=orm.birth_date,
            status=orm.status,
            status_changed_at=orm.status_changed_at,
            mother_id=orm.mother_id,
            father_id=orm.father_id,
            acquisition_date=orm.acquisition_date,
            notes=orm.notes,
            is_active=orm.is_active,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
        )

    def _filtered(
        self,
        stmt,
        farm_id: UUID,
        *,
        status: str | None = None,
        species_id: str | None = None,
        sex: str | None = None,
        lot_id: UUID | None = None,
        search: str | None = None,
    ):
        stmt = stmt.where(AnimalORM.farm_id == farm_id, AnimalORM.deleted_at.is_(None))
        if status is not None:
            stmt = stmt.where(AnimalORM.status == status)
        if species_id is not None:
            stmt = stmt.where(AnimalORM.species_id == species_id)
        if sex is not None:
            stmt = stmt.where(AnimalORM.sex == sex)
        if lot_id is not None:
            members = select(LotMembershipORM.animal_id).where(
                LotMembershipORM.farm_id == farm_id,
                LotMembershipORM.lot_id == lot_id,
                LotMembershipORM.left_at.is_(None),
            )
            stmt = stmt.where(AnimalORM.id.in_(members))
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    AnimalORM.official_number.ilike(pattern),
                    AnimalORM.visual_id.ilike(pattern),
                    AnimalORM.current_eid.ilike(pattern),
                    AnimalORM.name.ilike(pattern),
                )
            )
        return stmt

    async def add(self, animal: Animal) -> Animal:
        orm = AnimalORM(
            id=animal.id,
            farm_id=animal.farm_id,
            species_id=animal.species_id,
            sex=animal.sex,
            official_number=animal.official_number,
            visual_id=animal.visual_id,
            current_eid=animal.current_eid,
            name=animal.name,
            breed_id=animal.breed_id,
            birth_date=animal.birth_date,
            status=animal.status,
            status_changed_at=animal.status_changed_at,
            mother_id=animal.mother_id,
            father_id=animal.father_id,
            acquisition_date=animal.acquisition_date,
            notes=animal.notes,
            is_active=animal.is_active,
            deleted_at=animal.deleted_at,
            created_at=animal.created_at,
            updated_at=animal.updated_at,
            version=animal.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Animal official number already exists for farm") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, animal_id: UUID) -> Animal | None:
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def get_many(self, farm_id: UUID, animal_ids: list[UUID]) -> list[Animal]:
        if not animal_ids:
            return []
        stmt = (
            select(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id.in_(animal_ids))
            .where(AnimalORM.deleted_at.is_(None))
        )
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        status: str | None = None,
        species_id: str | None = None,
        sex: str | None = None,
        lot_id: UUID | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Animal]:
        stmt = self._filtered(
            select(AnimalORM),
            farm_id,
            status=status,
            species_id=species_id,
            sex=sex,
            lot_id=lot_id,
            search=search,
        )
        column = _SORT_COLUMNS.get(sort_by or "created_at", AnimalORM.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        stmt = stmt.order_by(ordering, AnimalORM.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        *,
        status: str | None = None,
        species_id: str | None = None,
        sex: str | None = None,
        lot_id: UUID | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(AnimalORM.id)),
            farm_id,
            status=status,
            species_id=species_id,
            sex=sex,
            lot_id=lot_id,
            search=search,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update(
        self,
        farm_id: UUID,
        animal_id: UUID,
        data: dict,
        expected_version: int,
    ) -> Animal | None:
        values = {
            **data,
            "version": expected_version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.farm_id == farm_id, AnimalORM.id == animal_id)
            .where(AnimalORM.version == expected_version)
            .where(AnimalORM.deleted_at.is_(None))
            .values(**values)
            .returning(AnimalORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update animal due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm)

    async def delete(self, farm_id: UUID, animal_id: UUID, expected_version: int) -> bool:
        now = datetime.now(timezone.utc)
        stmt = (
            update(AnimalORM)
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.id == animal_id)
            .where(AnimalORM.version == expected_version)
            .where(AnimalORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now, version=expected_version + 1)
            .returning(AnimalORM.id)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete animal") from exc
        return result.scalar_one_or_none() is not None

    async def count_offspring(self, farm_id: UUID, animal_id: UUID) -> int:
        stmt = (
            select(func.count(AnimalORM.id))
            .where(AnimalORM.farm_id == farm_id)
            .where(AnimalORM.deleted_at.is_(None))
            .where(or_(AnimalORM.mother_id == animal_id, AnimalORM.father_id == animal_id))
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
