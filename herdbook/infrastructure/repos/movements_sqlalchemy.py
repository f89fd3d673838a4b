from __future__ import annotations

from collections import defaultdict
from datetime import date
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.application.errors import InfrastructureError
from herdbook.application.interfaces.repositories.movements import MovementRepository
from herdbook.domain.models.movement_event import MovementAnimal, MovementEvent
from herdbook.infrastructure.db.orm.movement_event import MovementAnimalORM, MovementEventORM
from herdbook.utils.datetime_tz import ensure_utc


class MovementsSQLAlchemyRepository(MovementRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: MovementEventORM, animal_ids: list[UUID]) -> MovementEvent:
        return MovementEvent(
            id=orm.id,
            farm_id=orm.farm_id,
            type=orm.type,
            movement_date=orm.movement_date,
            payload=dict(orm.payload or {}),
            notes=orm.notes,
            animal_ids=animal_ids,
            created_at=ensure_utc(orm.created_at),
        )

    def _snapshot_to_domain(self, orm: MovementAnimalORM) -> MovementAnimal:
        return MovementAnimal(
            movement_id=orm.movement_id,
            animal_id=orm.animal_id,
            species_id=orm.species_id,
            sex=orm.sex,
            status_before=orm.status_before,
            official_number=orm.official_number,
            visual_id=orm.visual_id,
            current_eid=orm.current_eid,
            breed_id=orm.breed_id,
            birth_date=orm.birth_date,
        )

    async def _with_animals(self, orms: list[MovementEventORM]) -> list[MovementEvent]:
        if not orms:
            return []
        stmt = select(MovementAnimalORM.movement_id, MovementAnimalORM.animal_id).where(
            MovementAnimalORM.movement_id.in_([o.id for o in orms])
        )
        result = await self.session.execute(stmt)
        animals: dict[UUID, list[UUID]] = defaultdict(list)
        for movement_id, animal_id in result.all():
            animals[movement_id].append(animal_id)
        return [self._to_domain(o, animals.get(o.id, [])) for o in orms]

    def _filtered(
        self,
        stmt,
        farm_id: UUID,
        *,
        type: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ):
        stmt = stmt.where(MovementEventORM.farm_id == farm_id)
        if type is not None:
            stmt = stmt.where(MovementEventORM.type == type)
        if animal_id is not None:
            stmt = stmt.where(
                MovementEventORM.id.in_(
                    select(MovementAnimalORM.movement_id).where(
                        MovementAnimalORM.animal_id == animal_id
                    )
                )
            )
        if date_from is not None:
            stmt = stmt.where(MovementEventORM.movement_date >= date_from)
        if date_to is not None:
            stmt = stmt.where(MovementEventORM.movement_date <= date_to)
        return stmt

    async def add(self, event: MovementEvent, snapshots: list[MovementAnimal]) -> MovementEvent:
        self.session.add(
            MovementEventORM(
                id=event.id,
                farm_id=event.farm_id,
                type=event.type,
                movement_date=event.movement_date,
                payload=event.payload,
                notes=event.notes,
                created_at=event.created_at,
            )
        )
        try:
            # Snapshot rows reference the event row
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to record movement") from exc
        self.session.add_all(
            [
                MovementAnimalORM(
                    movement_id=s.movement_id,
                    animal_id=s.animal_id,
                    farm_id=event.farm_id,
                    species_id=s.species_id,
                    breed_id=s.breed_id,
                    sex=s.sex,
                    status_before=s.status_before,
                    official_number=s.official_number,
                    visual_id=s.visual_id,
                    current_eid=s.current_eid,
                    birth_date=s.birth_date,
                )
                for s in snapshots
            ]
        )
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise InfrastructureError("Failed to record movement") from exc
        return event

    async def get(self, farm_id: UUID, movement_id: UUID) -> MovementEvent | None:
        stmt = select(MovementEventORM).where(
            MovementEventORM.farm_id == farm_id, MovementEventORM.id == movement_id
        )
        result = await self.session.execute(stmt)
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return (await self._with_animals([orm]))[0]

    async def list(
        self,
        farm_id: UUID,
        *,
        offset: int = 0,
        limit: int | None = None,
        type: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
        sort_order: str = "desc",
    ) -> list[MovementEvent]:
        stmt = self._filtered(
            select(MovementEventORM),
            farm_id,
            type=type,
            animal_id=animal_id,
            date_from=date_from,
            date_to=date_to,
        )
        if sort_order == "asc":
            stmt = stmt.order_by(MovementEventORM.movement_date, MovementEventORM.created_at)
        else:
            stmt = stmt.order_by(
                MovementEventORM.movement_date.desc(), MovementEventORM.created_at.desc()
            )
        stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return await self._with_animals(list(result.scalars().all()))

    async def count(
        self,
        farm_id: UUID,
        *,
        type: str | None = None,
        animal_id: UUID | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> int:
        stmt = self._filtered(
            select(func.count(MovementEventORM.id)),
            farm_id,
            type=type,
            animal_id=animal_id,
            date_from=date_from,
            date_to=date_to,
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_for_animal(self, farm_id: UUID, animal_id: UUID) -> list[MovementEvent]:
        return await self.list(farm_id, animal_id=animal_id, sort_order="asc")

    async def count_for_animal(self, farm_id: UUID, animal_id: UUID) -> int:
        stmt = (
            select(func.count())
            .select_from(MovementAnimalORM)
            .where(MovementAnimalORM.farm_id == farm_id, MovementAnimalORM.animal_id == animal_id)
        )
        result = await self.session.execute(stmt)
        return result.scalar() or 0

    async def list_snapshots(self, farm_id: UUID, movement_id: UUID) -> list[MovementAnimal]:
        stmt = select(MovementAnimalORM).where(
            MovementAnimalORM.farm_id == farm_id, MovementAnimalORM.movement_id == movement_id
        )
        result = await self.session.execute(stmt)
        return [self._snapshot_to_domain(orm) for orm in result.scalars().all()]
