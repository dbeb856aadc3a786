"""Product Repository - catalog lookups used by stock messages and listings."""
from typing import Iterable, Optional

from backoffice.db import PRODUCTS_TABLE
from backoffice.services.models import ProductLabel

from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Product database operations."""

    async def get_display_name(self, product_id: int) -> Optional[str]:
        """Get product name by ID."""
        result = await self.client.table(PRODUCTS_TABLE).select("name").eq(
            "id", product_id
        ).limit(1).execute()

        return result.data[0].get("name") if result.data else None

    async def get_labels(self, product_ids: Iterable[int]) -> dict[int, ProductLabel]:
        """Get name and article for many products in one query."""
        ids = sorted(set(product_ids))
        if not ids:
            return {}

        result = await self.client.table(PRODUCTS_TABLE).select(
            "id, name, article"
        ).in_("id", ids).execute()

        return {row["id"]: ProductLabel(**row) for row in result.data or []}
