from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import ConflictError
from herdbook.domain.models.lot import Lot
from herdbook.domain.ports.lots_repo import LotsRepo
from herdbook.infrastructure.db.orm.lot import LotMembershipORM, LotORM
from herdbook.utils.datetime_tz import ensure_utc

_SORT_COLUMNS = {
    "created_at": LotORM.created_at,
    "updated_at": LotORM.updated_at,
    "name": LotORM.name,
    "type": LotORM.type,
    "status": LotORM.status,
}


def _animal_count():
    return (
        select(func.count(LotMembershipORM.id))
        .where(LotMembershipORM.lot_id == LotORM.id, LotMembershipORM.left_at.is_(None))
        .correlate(LotORM)
        .scalar_subquery()
        .label("animal_count")
    )


class LotsSQLAlchemyRepository(LotsRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: LotORM, animal_count: int | None = None) -> Lot:
        return Lot(
            id=orm.id,
            farm_id=orm.farm_id,
            name=orm.name,
            type=orm.type,
            status=orm.status,
            description=orm.description,
            notes=orm.notes,
            product_id=orm.product_id,
            product_name=orm.product_name,
            treatment_date=orm.treatment_date,
            withdrawal_end_date=orm.withdrawal_end_date,
            veterinarian_id=orm.veterinarian_id,
            veterinarian_name=orm.veterinarian_name,
            price_total=orm.price_total,
            buyer_name=orm.buyer_name,
            seller_name=orm.seller_name,
            closed_at=ensure_utc(orm.closed_at),
            is_active=orm.is_active,
            deleted_at=ensure_utc(orm.deleted_at),
            created_at=ensure_utc(orm.created_at),
            updated_at=ensure_utc(orm.updated_at),
            version=orm.version,
            animal_count=animal_count,
        )

    def _filtered(
        self,
        stmt,
        farm_id: UUID,
        *,
        type: str | None = None,
        status: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ):
        stmt = stmt.where(LotORM.farm_id == farm_id, LotORM.deleted_at.is_(None))
        if type is not None:
            stmt = stmt.where(LotORM.type == type)
        if status is not None:
            stmt = stmt.where(LotORM.status == status)
        if is_active is not None:
            stmt = stmt.where(LotORM.is_active.is_(is_active))
        if search and search.strip():
            pattern = f"%{search.strip()}%"
            stmt = stmt.where(or_(LotORM.name.ilike(pattern), LotORM.description.ilike(pattern)))
        return stmt

    async def _count_members(self, lot_id: UUID) -> int:
        stmt = select(func.count(LotMembershipORM.id)).where(
            LotMembershipORM.lot_id == lot_id, LotMembershipORM.left_at.is_(None)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def add(self, lot: Lot) -> Lot:
        orm = LotORM(
            id=lot.id,
            farm_id=lot.farm_id,
            name=lot.name,
            type=lot.type,
            status=lot.status,
            description=lot.description,
            notes=lot.notes,
            product_id=lot.product_id,
            product_name=lot.product_name,
            treatment_date=lot.treatment_date,
            withdrawal_end_date=lot.withdrawal_end_date,
            veterinarian_id=lot.veterinarian_id,
            veterinarian_name=lot.veterinarian_name,
            price_total=lot.price_total,
            buyer_name=lot.buyer_name,
            seller_name=lot.seller_name,
            closed_at=lot.closed_at,
            is_active=lot.is_active,
            deleted_at=lot.deleted_at,
            created_at=lot.created_at,
            updated_at=lot.updated_at,
            version=lot.version,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create lot") from exc
        return self._to_domain(orm, animal_count=0)

    async def get(self, farm_id: UUID, lot_id: UUID) -> Lot | None:
        stmt = select(LotORM, _animal_count()).where(
            LotORM.farm_id == farm_id, LotORM.id == lot_id, LotORM.deleted_at.is_(None)
        )
        result = await self.session.execute(stmt)
        row = result.one_or_none()
        return self._to_domain(row[0], row[1]) if row else None

    async def find_by_name(self, farm_id: UUID, name: str) -> Lot | None:
        stmt = select(LotORM).where(
            LotORM.farm_id == farm_id,
            func.lower(LotORM.name) == name.strip().lower(),
            LotORM.deleted_at.is_(None),
        )
        result = await self.session.execute(stmt)
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        type: str | None = None,
        status: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: str = "desc",
    ) -> list[Lot]:
        stmt = self._filtered(
            select(LotORM, _animal_count()),
            farm_id,
            type=type,
            status=status,
            is_active=is_active,
            search=search,
        )
        column = _SORT_COLUMNS.get(sort_by or "created_at", LotORM.created_at)
        ordering = column.asc() if sort_order == "asc" else column.desc()
        stmt = stmt.order_by(ordering, LotORM.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm, count) for orm, count in result.all()]

    async def count(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        status: str | None = None,
        is_active: bool | None = None,
        search: str | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(LotORM.id)),
            farm_id,
            type=type,
            status=status,
            is_active=is_active,
            search=search,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def update(
        self, farm_id: UUID, lot_id: UUID, data: dict, expected_version: int
    ) -> Lot | None:
        values = {
            **data,
            "version": expected_version + 1,
            "updated_at": datetime.now(timezone.utc),
        }
        stmt = (
            update(LotORM)
            .where(LotORM.farm_id == farm_id, LotORM.id == lot_id)
            .where(LotORM.version == expected_version)
            .where(LotORM.deleted_at.is_(None))
            .values(**values)
            .returning(LotORM)
        )
        try:
            result = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Failed to update lot due to constraint violation") from exc
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return self._to_domain(orm, await self._count_members(lot_id))
