from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from herdbook.application.pagination import Page

T = TypeVar("T")


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_domain(cls, obj: Any, **extra: Any):
        values = {name: getattr(obj, name) for name in cls.model_fields if hasattr(obj, name)}
        values.update(extra)
        return cls(**values)


class EntityResponse(CamelModel):
    id: UUID
    created_at: datetime
    updated_at: datetime
    deleted_at: datetime | None = None
    version: int


class PageMeta(CamelModel):
    total: int
    page: int
    limit: int
    total_pages: int


class PageResponse(CamelModel, Generic[T]):
    data: list[T]
    meta: PageMeta


def to_page_response(page: Page, convert: Callable[[Any], Any]) -> dict:
    return {
        "data": [convert(item) for item in page.items],
        "meta": PageMeta(
            total=page.total, page=page.page, limit=page.limit, total_pages=page.total_pages
        ),
    }


def camelize_keys(values: dict | None) -> dict:
    return {to_camel(key): value for key, value in (values or {}).items()}