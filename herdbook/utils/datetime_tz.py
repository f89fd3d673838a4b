from __future__ import annotations

from datetime import date, datetime, timezone

from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE_NAME = "UTC"


def farm_tz(name: str | None = None) -> ZoneInfo:
    return ZoneInfo(name or DEFAULT_TIMEZONE_NAME)


def today_local(tz_name: str | None = None) -> date:
    """Calendar date "today" on the farm's wall clock."""
    return datetime.now(farm_tz(tz_name)).date()


def ensure_utc(dt: datetime | None) -> datetime | None:
    """Attach UTC to naive datetimes read back from the database.

    SQLite drops the offset on `DateTime(timezone=True)` columns; values are always
    written in UTC, so attaching it back keeps comparisons with aware values valid.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)
