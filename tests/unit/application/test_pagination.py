from __future__ import annotations

from datetime import date

import pytest

from herdbook.application.errors import ValidationError
from herdbook.application.pagination import Page, PageParams, ensure_date_range


def test_offset_and_total_pages():
    params = PageParams(page=3, limit=10)
    assert params.offset == 20
    assert Page(items=[], total=21, page=3, limit=10).total_pages == 3
    assert Page(items=[], total=0, page=1, limit=10).total_pages == 0


def test_validate_bounds():
    with pytest.raises(ValidationError):
        PageParams(page=0).validate()
    with pytest.raises(ValidationError):
        PageParams(limit=500).validate(max_limit=100)
    with pytest.raises(ValidationError):
        PageParams(sort_order="sideways").validate()
    assert PageParams(sort_by="name").validate(sortable=("name",)).sort_by == "name"


def test_date_range_must_be_ordered():
    ensure_date_range(date(2025, 1, 1), date(2025, 1, 1))
    ensure_date_range(None, date(2025, 1, 1))
    with pytest.raises(ValidationError):
        ensure_date_range(date(2025, 2, 1), date(2025, 1, 1))
