"""Movement Repositories - read access to the receipt and realization ledgers.

Both ledgers share one row shape (product_id, size_code, color_id, qty), so a
single repository class is parametrised by table name.
"""
from typing import Any, Optional

from backoffice.db import COLORS_TABLE, REALIZATION_ITEMS_TABLE, RECEIPT_ITEMS_TABLE
from backoffice.services.models import MovementRecord

from .base import PAGE_SIZE, BaseRepository

MOVEMENT_COLUMNS = "id, product_id, size_code, color_id, qty"


class MovementRepository(BaseRepository):
    """Read-only queries over one movement ledger."""

    table: str = ""

    async def fetch(
        self,
        product_id: Optional[int] = None,
        size_code: Optional[str] = None,
        with_color_names: bool = False,
    ) -> list[MovementRecord]:
        """Get all movement lines, optionally narrowed to a product and size.

        product_id=None reads the whole ledger (warehouse listings). Color names
        come from a left join, so rows without a color row are still counted.
        """
        columns = MOVEMENT_COLUMNS
        if with_color_names:
            columns += f", {COLORS_TABLE}(name)"

        records: list[MovementRecord] = []
        offset = 0
        while True:
            query = self.client.table(self.table).select(columns)
            if product_id is not None:
                query = query.eq("product_id", product_id)
            if size_code:
                query = query.eq("size_code", size_code)
            result = await query.order("id").range(offset, offset + PAGE_SIZE - 1).execute()

            rows = result.data or []
            records.extend(self._to_record(row) for row in rows)
            if len(rows) < PAGE_SIZE:
                return records
            offset += PAGE_SIZE

    @staticmethod
    def _to_record(row: dict[str, Any]) -> MovementRecord:
        color = row.get(COLORS_TABLE)
        if isinstance(color, dict):
            row = {**row, "color_name": color.get("name")}
        return MovementRecord(**row)


class ReceiptRepository(MovementRepository):
    """Inbound movements (goods received into the warehouse)."""

    table = RECEIPT_ITEMS_TABLE


class RealizationRepository(MovementRepository):
    """Outbound movements (sales and other realizations)."""

    table = REALIZATION_ITEMS_TABLE
