"""Stock Ledger - the single read interface the stock domains depend on.

Composes the receipt, realization and product repositories. Tests swap in an
in-memory ledger exposing the same coroutines.
"""
from typing import Iterable, Optional

from backoffice.services.models import MovementRecord, ProductLabel

from .movement_repo import RealizationRepository, ReceiptRepository
from .product_repo import ProductRepository


class StockLedger:
    """Receipts, realizations and product names behind one object."""

    def __init__(
        self,
        receipts: ReceiptRepository,
        realizations: RealizationRepository,
        products: ProductRepository,
    ) -> None:
        self.receipts = receipts
        self.realizations = realizations
        self.products = products

    async def fetch_receipts(
        self,
        product_id: Optional[int] = None,
        size_code: Optional[str] = None,
        with_color_names: bool = False,
    ) -> list[MovementRecord]:
        return await self.receipts.fetch(product_id, size_code, with_color_names)

    async def fetch_realizations(
        self,
        product_id: Optional[int] = None,
        size_code: Optional[str] = None,
    ) -> list[MovementRecord]:
        return await self.realizations.fetch(product_id, size_code)

    async def fetch_product_name(self, product_id: int) -> Optional[str]:
        return await self.products.get_display_name(product_id)

    async def fetch_product_labels(self, product_ids: Iterable[int]) -> dict[int, ProductLabel]:
        return await self.products.get_labels(product_ids)
