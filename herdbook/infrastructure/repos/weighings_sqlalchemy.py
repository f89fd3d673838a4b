from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import ConflictError, InfrastructureError
from herdbook.application.interfaces.repositories.weighings import WeighingRepository
from herdbook.domain.models.weighing import Weighing
from herdbook.infrastructure.db.orm.weighing import WeighingORM
from herdbook.utils.datetime_tz import ensure_utc

_SORT_COLUMNS = {
    "weight_date": WeighingORM.weight_date,
    "weight": WeighingORM.weight,
    "created_at": WeighingORM.created_at,
}


class WeighingsSQLAlchemyRepository(WeighingRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: WeighingORM) -> Weighing:
        return Weighing(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            weight=orm.weight,
            weight_date=orm.weight_date,
            unit=orm.unit,
            purpose=orm.purpose,
            method=orm.method,
            notes=orm.notes,
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
        animal_id: UUID | None = None,
        purpose: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        stmt = stmt.where(WeighingORM.farm_id == farm_id, WeighingORM.deleted_at.is_(None))
        if animal_id is not None:
            stmt = stmt.where(WeighingORM.animal_id == animal_id)
        if purpose is not None:
            stmt = stmt.where(WeighingORM.purpose == purpose)
        if date_from is not None:
            stmt = stmt.where(WeighingORM.weight_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(WeighingORM.weight_date <= date_to)
        return stmt

    async def add(self, weighing: Weighing) -> Weighing:
        orm = WeighingORM(
            id=weighing.id,
            farm_id=weighing.farm_id,
            animal_id=weighing.animal_id,
            weight=weighing.weight,
            unit=weighing.unit,
            weight_date=weighing.weight_date,
            purpose=weighing.purpose,
            method=weighing.method,
            notes=weighing.notes,
            deleted_at=weighing.deleted_at,
            created_at=weighing.created_at,
            updated_at=weighing.updated_at,
            version=weighing.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to record weighing") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, weighing_id: UUID) -> Weighing | None:
        stmt = select(WeighingORM).where(
            WeighingORM.farm_id == farm_id,
            WeighingORM.id == weighing_id,
            WeighingORM.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        animal_id: UUID | None = None,
        purpose: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Weighing]:
        stmt = self._filtered(
            select(WeighingORM),
            farm_id,
            animal_id=animal_id,
            purpose=purpose,
            date_from=date_from,
            date_to=date_to,
        )
        column = _SORT_COLUMNS.get(sort_by or "weight_date", WeighingORM.weight_date)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        stmt = stmt.order_by(ordering, WeighingORM.created_at).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        purpose: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(WeighingORM.id)),
            farm_id,
            animal_id=animal_id,
            purpose=purpose,
            date_from=date_from,
            date_to=date_to,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[Weighing]:
        return await self.list(farm_id, animal_id=animal_id, sort_order="asc")

    async def latest_for_animal(self, farm_id: UUID, animal_id: UUID) -> Weighing | None:
        stmt = (
            self._filtered(select(WeighingORM), farm_id, animal_id=animal_id)
            .order_by(WeighingORM.weight_date.desc(), WeighingORM.created_at.desc())
            .limit(1)
        )
        result = await self.session.execute(stmt)
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        return await self.count(farm_id, animal_id=animal_id)

    async def update(
        self, farm_id: UUID, weighing_id: UUID, data: dict, expected_version: int
    ) -> Weighing | None:
        values = {
            **data,
            "version": expected_version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            update(WeighingORM)
            .where(WeighingORM.farm_id == farm_id, WeighingORM.id == weighing_id)
            .where(WeighingORM.version == expected_version)
            .where(WeighingORM.deleted_at.is_(None))
            .values(**values)
            .returning(WeighingORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update weighing due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, farm_id: UUID, weighing_id: UUID, expected_version: int) -> bool:
        now = datetime.now(timezone.utc)
        stmt = (
            update(WeighingORM)
            .where(WeighingORM.farm_id == farm_id, WeighingORM.id == weighing_id)
            .where(WeighingORM.version == expected_version)
            .where(WeighingORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now, version=expected_version + 1)
            .returning(WeighingORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
