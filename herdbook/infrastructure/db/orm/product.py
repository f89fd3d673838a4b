from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from herdbook.infrastructure.db.base import Base


class ProductORM(Base):
    """Veterinary product catalog, maintained outside this service."""

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    withdrawal_meat_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    withdrawal_milk_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
