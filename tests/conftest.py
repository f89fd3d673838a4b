from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from uuid import UUID, uuid4

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from herdbook.config.settings import Settings
from herdbook.infrastructure.db.base import Base
from herdbook.infrastructure.db.orm import (  # noqa: F401
    animal,
    lot,
    movement_event,
    product,
    treatment,
    weighing,
)
from herdbook.infrastructure.db.orm.product import ProductORM
from herdbook.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_session_factory,
)
from herdbook.interfaces.http.main import create_app


@pytest.fixture()
def farm_id() -> UUID:
    return uuid4()


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "farm_header": "X-Farm-ID",
            "log_level": "INFO",
            "environment": "test",
        }
    )


@pytest.fixture()
async def session_factory(test_settings: Settings):
    engine = create_engine(test_settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield create_session_factory(engine)
    await engine.dispose()


@pytest.fixture()
def uow_factory(session_factory):
    def factory() -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session_factory)

    return factory


@pytest.fixture()
def seed_product(session_factory):
    async def seed(
        product_id: str,
        name: str,
        *,
        meat_days: int | None = None,
        milk_hours: int | None = None,
    ) -> None:
        async with session_factory() as session:
            session.add(
                ProductORM(
                    id=product_id,
                    name=name,
                    withdrawal_meat_days=meat_days,
                    withdrawal_milk_hours=milk_hours,
                )
            )
            await session.commit()

    return seed


@pytest.fixture()
def app(test_settings: Settings):
    return create_app(settings=test_settings)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
    await engine.dispose()


@pytest.fixture()
def headers(farm_id: UUID) -> dict[str, str]:
    return {"X-Farm-ID": str(farm_id)}
