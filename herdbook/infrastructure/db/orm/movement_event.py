from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Index, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from herdbook.infrastructure.db.base import Base


class MovementEventORM(Base):
    """Append-only; rows are never updated or deleted."""

    __tablename__ = "movement_events"
    __table_args__ = (
        Index("ix_movement_events_farm_date", "farm_id", "movement_date"),
        Index("ix_movement_events_farm_type", "farm_id", "type"),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    type: Mapped[str] = mapped_column(String(32), nullable=False)
    movement_date: Mapped[date] = mapped_column(Date, nullable=False)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )


class MovementAnimalORM(Base):
    __tablename__ = "movement_animals"

    movement_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("movement_events.id"), primary_key=True
    )
    animal_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("animals.id"), primary_key=True, index=True
    )
    farm_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)

    # Snapshot of the animal when the movement was recorded
    species_id: Mapped[str] = mapped_column(String(64), nullable=False)
    breed_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sex: Mapped[str] = mapped_column(String(6), nullable=False)
    status_before: Mapped[str] = mapped_column(String(16), nullable=False)
    official_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    visual_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    current_eid: Mapped[str | None] = mapped_column(String(64), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
