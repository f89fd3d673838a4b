from __future__ import annotations

from datetime import date, datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import ConflictError, InfrastructureError
from herdbook.application.interfaces.repositories.treatments import TreatmentRepository
from herdbook.domain.models.treatment import Treatment
from herdbook.infrastructure.db.orm.treatment import TreatmentORM
from herdbook.utils.datetime_tz import ensure_utc


class TreatmentsSQLAlchemyRepository(TreatmentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TreatmentORM) -> Treatment:
        return Treatment(
            id=orm.id,
            farm_id=orm.farm_id,
            animal_id=orm.animal_id,
            type=orm.type,
            treatment_date=orm.treatment_date,
            product_id=orm.product_id,
            product_name=orm.product_name,
            dose=orm.dose,
            dose_unit=orm.dose_unit,
            veterinarian_name=orm.veterinarian_name,
            diagnosis=orm.diagnosis,
            next_due_date=orm.next_due_date,
            cost=orm.cost,
            notes=orm.notes,
            withdrawal_meat_until=orm.withdrawal_meat_until,
            withdrawal_milk_until=orm.withdrawal_milk_until,
            withdrawal_end_date=orm.withdrawal_end_date,
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
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ):
        stmt = stmt.where(TreatmentORM.farm_id == farm_id, TreatmentORM.deleted_at.is_(None))
        if animal_id is not None:
            stmt = stmt.where(TreatmentORM.animal_id == animal_id)
        if type is not None:
            stmt = stmt.where(TreatmentORM.type == type)
        if date_from is not None:
            stmt = stmt.where(TreatmentORM.treatment_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(TreatmentORM.treatment_date <= date_to)
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(
                or_(
                    TreatmentORM.product_name.ilike(pattern),
                    TreatmentORM.diagnosis.ilike(pattern),
                    TreatmentORM.veterinarian_name.ilike(pattern),
                )
            )
        return stmt

    async def add(self, treatment: Treatment) -> Treatment:
        orm = TreatmentORM(
            id=treatment.id,
            farm_id=treatment.farm_id,
            animal_id=treatment.animal_id,
            type=treatment.type,
            treatment_date=treatment.treatment_date,
            product_id=treatment.product_id,
            product_name=treatment.product_name,
            dose=treatment.dose,
            dose_unit=treatment.dose_unit,
            veterinarian_name=treatment.veterinarian_name,
            diagnosis=treatment.diagnosis,
            next_due_date=treatment.next_due_date,
            cost=treatment.cost,
            notes=treatment.notes,
            withdrawal_meat_until=treatment.withdrawal_meat_until,
            withdrawal_milk_until=treatment.withdrawal_milk_until,
            withdrawal_end_date=treatment.withdrawal_end_date,
            deleted_at=treatment.deleted_at,
            created_at=treatment.created_at,
            updated_at=treatment.updated_at,
            version=treatment.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to record treatment") from exc
        return self._to_domain(orm)

    async def get(self, farm_id: UUID, treatment_id: UUID) -> Treatment | None:
        stmt = select(TreatmentORM).where(
            TreatmentORM.farm_id == farm_id,
            TreatmentORM.id == treatment_id,
            TreatmentORM.deleted_at.is_(None),
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
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
        sort_order: str = "desc",
    ) -> list[Treatment]:
        stmt = self._filtered(
            select(TreatmentORM),
            farm_id,
            animal_id=animal_id,
            type=type,
            date_from=date_from,
            date_to=date_to,
            search=search,
        )
        if sort_order == "asc":
            stmt = stmt.order_by(TreatmentORM.treatment_date, TreatmentORM.created_at)
        else:
            stmt = stmt.order_by(
                TreatmentORM.treatment_date.desc(), TreatmentORM.created_at.desc()
            )
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def count(
        self,
        farm_id: UUID,
        *,
        animal_id: UUID | None = None,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(TreatmentORM.id)),
            farm_id,
            animal_id=animal_id,
            type=type,
            date_from=date_from,
            date_to=date_to,
            search=search,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_animal(
        self, farm_id: UUID, animal_id: UUID, *, as_of: date | None = None
    ) -> list[Treatment]:
        return await self.list(farm_id, animal_id=animal_id, date_to=as_of)

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        return await self.count(farm_id, animal_id=animal_id)

    async def update(
        self, farm_id: UUID, treatment_id: UUID, data: dict, expected_version: int
    ) -> Treatment | None:
        values = {
            **data,
            "version": expected_version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            update(TreatmentORM)
            .where(TreatmentORM.farm_id == farm_id, TreatmentORM.id == treatment_id)
            .where(TreatmentORM.version == expected_version)
            .where(TreatmentORM.deleted_at.is_(None))
            .values(**values)
            .returning(TreatmentORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update treatment due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def delete(self, farm_id: UUID, treatment_id: UUID, expected_version: int) -> bool:
        now = datetime.now(timezone.utc)
        stmt = (
            update(TreatmentORM)
            .where(TreatmentORM.farm_id == farm_id, TreatmentORM.id == treatment_id)
            .where(TreatmentORM.version == expected_version)
            .where(TreatmentORM.deleted_at.is_(None))
            .values(deleted_at=now, updated_at=now, version=expected_version + 1)
            .returning(TreatmentORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None
