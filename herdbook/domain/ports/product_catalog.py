from __future__ import annotations

from abc import ABC, abstractmethod

from herdbook.domain.models.treatment import ProductWithdrawal


class ProductCatalog(ABC):
    """Read-only view of the veterinary product catalog."""

    @abstractmethod
    async def get_withdrawal(self, product_id: str) -> ProductWithdrawal | None: ...
