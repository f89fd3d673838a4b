from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdbook.domain.models.treatment import ProductWithdrawal
from herdbook.domain.ports.product_catalog import ProductCatalog
from herdbook.infrastructure.db.orm.product import ProductORM


class ProductCatalogSQLAlchemyRepository(ProductCatalog):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_withdrawal(self, product_id: str) -> ProductWithdrawal | None:
        result = await self.session.execute(select(ProductORM).where(ProductORM.id == product_id))
        orm = result.scalar_one_or_none()
        if not orm:
            return None
        return ProductWithdrawal(
            product_id=orm.id,
            name=orm.name,
            withdrawal_meat_days=orm.withdrawal_meat_days,
            withdrawal_milk_hours=orm.withdrawal_milk_hours,
        )
