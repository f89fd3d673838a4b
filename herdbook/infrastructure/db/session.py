from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from herdbook.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    return create_async_engine(database_url, echo=echo, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    """One session and one transaction per use case; rolled back on any error."""

    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._reset_repositories()

    def _reset_repositories(self) -> None:
        self.animals = None
        self.movements = None
        self.lots = None
        self.lot_memberships = None
        self.weighings = None
        self.treatments = None
        self.products = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from herdbook.infrastructure.repos.animals_sqlalchemy import AnimalsSQLAlchemyRepository
        from herdbook.infrastructure.repos.lot_memberships_sqlalchemy import (
            LotMembershipsSQLAlchemyRepository,
        )
        from herdbook.infrastructure.repos.lots_sqlalchemy import LotsSQLAlchemyRepository
        from herdbook.infrastructure.repos.movements_sqlalchemy import (
            MovementsSQLAlchemyRepository,
        )
        from herdbook.infrastructure.repos.products_sqlalchemy import (
            ProductCatalogSQLAlchemyRepository,
        )
        from herdbook.infrastructure.repos.treatments_sqlalchemy import (
            TreatmentsSQLAlchemyRepository,
        )
        from herdbook.infrastructure.repos.weighings_sqlalchemy import (
            WeighingsSQLAlchemyRepository,
        )

        self.animals = AnimalsSQLAlchemyRepository(self.session)
        self.movements = MovementsSQLAlchemyRepository(self.session)
        self.lots = LotsSQLAlchemyRepository(self.session)
        self.lot_memberships = LotMembershipsSQLAlchemyRepository(self.session)
        self.weighings = WeighingsSQLAlchemyRepository(self.session)
        self.treatments = TreatmentsSQLAlchemyRepository(self.session)
        self.products = ProductCatalogSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._reset_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
