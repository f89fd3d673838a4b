from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import ConflictError
from herdbook.application.interfaces.repositories.lot_memberships import (
    LotMembershipRepository,
)
from herdbook.domain.models.lot import LotMembership
from herdbook.domain.value_objects.lot_type import LotStatus
from herdbook.infrastructure.db.orm.lot import LotMembershipORM, LotORM
from herdbook.utils.datetime_tz import ensure_utc


class LotMembershipsSQLAlchemyRepository(LotMembershipRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: LotMembershipORM) -> LotMembership:
        return LotMembership(
            id=orm.id,
            farm_id=orm.farm_id,
            lot_id=orm.lot_id,
            animal_id=orm.animal_id,
            joined_at=ensure_utc(orm.joined_at),
            left_at=ensure_utc(orm.left_at),
        )

    async def add(self, membership: LotMembership) -> LotMembership:
        orm = LotMembershipORM(
            id=membership.id,
            farm_id=membership.farm_id,
            lot_id=membership.lot_id,
            animal_id=membership.animal_id,
            joined_at=membership.joined_at,
            left_at=membership.left_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to add animal to lot") from exc
        return self._to_domain(orm)

    async def get_active(
        self, farm_id: UUID, lot_id: UUID, animal_id: UUID
    ) -> LotMembership | None:
        stmt = select(LotMembershipORM).where(
            LotMembershipORM.farm_id == farm_id,
            LotMembershipORM.lot_id == lot_id,
            LotMembershipORM.animal_id == animal_id,
            LotMembershipORM.left_at.is_(None),
        )
        result = await self.session.execute(stmt)
        orm = result.scalars().first()
        return self._to_domain(orm) if orm else None

    async def list_for_lot(
        self, farm_id: UUID, lot_id: UUID, *, include_history: bool = False
    ) -> list[LotMembership]:
        stmt = select(LotMembershipORM).where(
            LotMembershipORM.farm_id == farm_id, LotMembershipORM.lot_id == lot_id
        )
        if not include_history:
            stmt = stmt.where(LotMembershipORM.left_at.is_(None))
        stmt = stmt.order_by(LotMembershipORM.joined_at)
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def list_for_animal(
        self, farm_id: UUID, animal_id: UUID, *, include_history: bool = True
    ) -> list[LotMembership]:
        stmt = select(LotMembershipORM).where(
            LotMembershipORM.farm_id == farm_id, LotMembershipORM.animal_id == animal_id
        )
        if not include_history:
            stmt = stmt.where(LotMembershipORM.left_at.is_(None))
        stmt = stmt.order_by(LotMembershipORM.joined_at.desc())
        result = await self.session.execute(stmt)
        return [self._to_domain(orm) for orm in result.scalars().all()]

    async def close(self, farm_id: UUID, membership_id: UUID, left_at: datetime) -> bool:
        stmt = (
            update(LotMembershipORM)
            .where(LotMembershipORM.farm_id == farm_id, LotMembershipORM.id == membership_id)
            .where(LotMembershipORM.left_at.is_(None))
            .values(left_at=left_at)
            .returning(LotMembershipORM.id)
        )
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none() is not None

    async def close_open_lot_memberships(
        self, farm_id: UUID, animal_id: UUID, left_at: datetime
    ) -> list[UUID]:
        stmt = (
            select(LotMembershipORM.id, LotMembershipORM.lot_id)
            .join(LotORM, LotORM.id == LotMembershipORM.lot_id)
            .where(
                LotMembershipORM.farm_id == farm_id,
                LotMembershipORM.animal_id == animal_id,
                LotMembershipORM.left_at.is_(None),
                LotORM.status == LotStatus.OPEN.value,
                LotORM.deleted_at.is_(None),
            )
        )
        rows = (await self.session.execute(stmt)).all()
        if not rows:
            return []
        await self.session.execute(
            update(LotMembershipORM)
            .where(LotMembershipORM.id.in_([row.id for row in rows]))
            .values(left_at=left_at)
        )
        return [row.lot_id for row in rows]

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        stmt = select(func.count(LotMembershipORM.id)).where(
            LotMembershipORM.farm_id == farm_id, LotMembershipORM.animal_id == animal_id
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0
