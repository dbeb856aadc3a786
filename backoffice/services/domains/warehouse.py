"""Warehouse domain service: stock read views for display and edit gates."""

from dataclasses import dataclass, field
from typing import Optional

from backoffice.errors import ERROR_COLOR_CHANGE_BLOCKED
from backoffice.logging import get_logger

from .stock import NetStockEntry, StockAggregator, WarehouseStockLine

logger = get_logger(__name__)


@dataclass
class StockSummary:
    """Product stock with color names, for display."""

    total_quantity: int = 0
    entries: list[NetStockEntry] = field(default_factory=list)


@dataclass
class StockPresence:
    """Whether a product has any stock at all."""

    has_stock: bool = False
    total_quantity: int = 0
    entries: list[NetStockEntry] = field(default_factory=list)


@dataclass
class ColorChangeCheck:
    """Whether a product's color may be edited."""

    can_change: bool
    reason: str | None = None
    stock_info: StockSummary | None = None


class WarehouseReporter:
    """Stock views built on the aggregator."""

    def __init__(self, aggregator: StockAggregator):
        self.aggregator = aggregator

    async def get_stock_summary(self, product_id: int) -> StockSummary:
        """Get product stock across all sizes with color names."""
        snapshot = await self.aggregator.compute_stock(product_id, resolve_color_names=True)
        return StockSummary(total_quantity=snapshot.total_quantity, entries=snapshot.entries)

    async def has_any_stock(self, product_id: int) -> StockPresence:
        """Check if the product has stock in any size or color."""
        snapshot = await self.aggregator.compute_stock(product_id)
        return StockPresence(
            has_stock=snapshot.total_quantity > 0,
            total_quantity=snapshot.total_quantity,
            entries=snapshot.entries,
        )

    async def get_stock_details(
        self,
        product_id: int,
        size_code: Optional[str] = None,
        color_id: Optional[int] = None,
    ) -> StockSummary:
        """Get named stock entries narrowed to a size and/or color."""
        snapshot = await self.aggregator.compute_stock(
            product_id, size_code, resolve_color_names=True
        )
        entries = [
            entry for entry in snapshot.entries
            if color_id is None or entry.color_id == color_id
        ]
        return StockSummary(total_quantity=sum(e.qty for e in entries), entries=entries)

    async def can_change_color(self, product_id: int) -> ColorChangeCheck:
        """A product's color is frozen while any of it is in stock."""
        presence = await self.has_any_stock(product_id)

        if presence.has_stock:
            logger.info(f"Color change refused for product {product_id}: {presence.total_quantity} in stock")
            return ColorChangeCheck(
                can_change=False,
                reason=(
                    f"{ERROR_COLOR_CHANGE_BLOCKED}. "
                    f"Warehouse holds {presence.total_quantity} unit(s)"
                ),
                stock_info=StockSummary(
                    total_quantity=presence.total_quantity,
                    entries=presence.entries,
                ),
            )

        return ColorChangeCheck(can_change=True)

    async def list_warehouse_stock(self) -> list[WarehouseStockLine]:
        """All positive stock buckets across products (raises StockLookupError)."""
        return await self.aggregator.compute_warehouse_stock()
