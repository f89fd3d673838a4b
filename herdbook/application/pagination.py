from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date
from typing import Generic, TypeVar

from herdbook.application.errors import ValidationError

T = TypeVar("T")

SORT_ORDERS = ("asc", "desc")


@dataclass(slots=True, frozen=True)
class PageParams:
    page: int = 1
    limit: int = 25
    search: str | None = None
    sort_by: str | None = None
    sort_order: str = "desc"

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def validate(self, *, max_limit: int = 100, sortable: tuple[str, ...] = ()) -> PageParams:
        if self.page < 1:
            raise ValidationError("page must be greater than or equal to 1")
        if self.limit <= 0 or self.limit > max_limit:
            raise ValidationError(f"limit must be between 1 and {max_limit}")
        if self.sort_order not in SORT_ORDERS:
            raise ValidationError("sortOrder must be 'asc' or 'desc'")
        if self.sort_by is not None and sortable and self.sort_by not in sortable:
            raise ValidationError(
                f"Cannot sort by '{self.sort_by}'. Must be one of: {', '.join(sortable)}"
            )
        return self


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    limit: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


def ensure_date_range(date_from: date | None, date_to: date | None) -> None:
    if date_from is not None and date_to is not None and date_from > date_to:
        raise ValidationError("date_from must be on or before date_to")
