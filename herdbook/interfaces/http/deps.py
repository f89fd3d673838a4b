from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import date
from uuid import UUID

from fastapi import Depends, Query, Request
from pydantic.alias_generators import to_snake

from herdbook.application.errors import ValidationError
from herdbook.application.pagination import PageParams
from herdbook.config.settings import Settings, get_settings
from herdbook.infrastructure.db.session import SQLAlchemyUnitOfWork
from herdbook.utils.datetime_tz import today_local


def get_app_settings(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_farm_id(request: Request, settings: Settings = Depends(get_app_settings)) -> UUID:
    raw = request.headers.get(settings.farm_header)
    if not raw:
        raise ValidationError(
            f"Missing {settings.farm_header} header", details={"header": settings.farm_header}
        )
    try:
        return UUID(raw)
    except ValueError as exc:
        raise ValidationError(
            f"Invalid {settings.farm_header} header", details={"header": settings.farm_header}
        ) from exc


def get_today(settings: Settings = Depends(get_app_settings)) -> date:
    return today_local(settings.timezone)


def get_page_params(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1),
    search: str | None = Query(None),
    sort_by: str | None = Query(None, alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    settings: Settings = Depends(get_app_settings),
) -> PageParams:
    return PageParams(
        page=page,
        limit=limit or settings.default_page_limit,
        search=search,
        sort_by=to_snake(sort_by) if sort_by else None,
        sort_order=sort_order,
    )
