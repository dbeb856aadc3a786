"""
Stock Domain Service

Derives on-hand stock from the two movement ledgers. Nothing is cached or
persisted: every call re-reads receipts and realizations and reduces them
into net quantities per (size_code, color_id).

The two fetches are independent snapshots taken concurrently. There is no
isolation across them, so a realization written between the reads may or
may not be reflected. Callers that reserve stock after a check are exposed
to check-then-act races; this service only reads.
"""

import asyncio
from dataclasses import dataclass, field
from typing import Iterable, Optional

from backoffice.errors import ERROR_UNKNOWN_PRODUCT, StockLookupError
from backoffice.logging import get_logger, sanitize_string_for_logging
from backoffice.services.models import MovementRecord

logger = get_logger(__name__)


@dataclass
class NetStockEntry:
    """Net on-hand quantity for one (size_code, color_id) bucket."""

    size_code: str
    color_id: int | None
    qty: int
    color_name: str | None = None


@dataclass
class StockSnapshot:
    """Point-in-time stock of one product."""

    total_quantity: int = 0
    entries: list[NetStockEntry] = field(default_factory=list)
    # Realizations whose bucket has no receipts; ignored in the totals
    orphaned_realizations: int = 0

    def find(self, size_code: str, color_id: int | None) -> NetStockEntry | None:
        """Exact (size_code, color_id) bucket; None matches only colorless stock."""
        for entry in self.entries:
            if entry.size_code == size_code and entry.color_id == color_id:
                return entry
        return None

    def entries_for_size(self, size_code: str) -> list[NetStockEntry]:
        return [entry for entry in self.entries if entry.size_code == size_code]


@dataclass
class StockLookup:
    """Result of a stock computation: a snapshot or the reason it failed."""

    snapshot: StockSnapshot | None = None
    error: StockLookupError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> StockSnapshot:
        if self.error is not None:
            raise self.error
        return self.snapshot


@dataclass
class WarehouseStockLine:
    """One positive stock bucket in the warehouse-wide listing."""

    product_id: int
    name: str
    article: str
    size_code: str
    color_id: int | None
    color_name: str
    qty: int


@dataclass
class _Bucket:
    qty: int = 0
    color_name: str | None = None


def reconcile(
    receipts: Iterable[MovementRecord],
    realizations: Iterable[MovementRecord],
    key=lambda record: record.stock_key,
) -> tuple[dict, int]:
    """
    Reduce the two ledgers into net quantities.

    Buckets are seeded from receipts only. Each realization is subtracted
    from its bucket with the result floored at zero; a realization whose
    bucket has no receipts is ignored and counted as orphaned.

    Args:
        receipts: Inbound movement records
        realizations: Outbound movement records
        key: Bucket key of a record (defaults to its (size_code, color_id))

    Returns:
        (buckets keyed in first-seen receipt order, orphaned realization count)
    """
    buckets: dict = {}
    for record in receipts:
        bucket = buckets.get(key(record))
        if bucket is None:
            # First color name seen wins
            bucket = buckets[key(record)] = _Bucket(color_name=record.color_name)
        bucket.qty += record.qty

    orphaned = 0
    for record in realizations:
        bucket = buckets.get(key(record))
        if bucket is None:
            orphaned += 1
            continue
        bucket.qty = max(0, bucket.qty - record.qty)

    return buckets, orphaned


async def read_ledgers(receipts_read, realizations_read) -> tuple[list, list]:
    """
    Await both ledger reads concurrently.

    The first read to fail cancels the other one and its exception is
    re-raised as is, so no read outlives the caller.
    """
    try:
        async with asyncio.TaskGroup() as tg:
            receipts = tg.create_task(receipts_read)
            realizations = tg.create_task(realizations_read)
    except ExceptionGroup as group:
        raise group.exceptions[0] from None
    return receipts.result(), realizations.result()


class StockAggregator:
    """
    Stock aggregation over the receipt and realization ledgers.

    compute_stock() keeps the historical fail-to-empty behaviour: a failed
    ledger read yields a zero snapshot. lookup() exposes the failure so a
    caller can tell "no stock" from "could not read stock".
    """

    def __init__(self, ledger, raise_on_error: bool = False):
        self.ledger = ledger
        self.raise_on_error = raise_on_error

    async def lookup(
        self,
        product_id: int,
        size_code: Optional[str] = None,
        resolve_color_names: bool = False,
    ) -> StockLookup:
        """
        Compute a product's stock, reporting read failures instead of hiding them.

        Args:
            product_id: Product to compute
            size_code: Restrict both ledgers to one size
            resolve_color_names: Attach color display names to entries

        Returns:
            StockLookup with either a snapshot or a StockLookupError
        """
        try:
            receipts, realizations = await read_ledgers(
                self.ledger.fetch_receipts(product_id, size_code, resolve_color_names),
                self.ledger.fetch_realizations(product_id, size_code),
            )
        except Exception as e:
            logger.error(
                f"Stock lookup failed for product {product_id} "
                f"(size {sanitize_string_for_logging(size_code)}): {e}",
                exc_info=True,
            )
            return StockLookup(error=StockLookupError(product_id, e))

        buckets, orphaned = reconcile(receipts, realizations)
        if orphaned:
            logger.warning(
                f"Product {product_id}: {orphaned} realization line(s) "
                f"reference size/color buckets with no receipts"
            )

        entries = [
            NetStockEntry(
                size_code=bucket_size,
                color_id=color_id,
                qty=bucket.qty,
                color_name=bucket.color_name if resolve_color_names else None,
            )
            for (bucket_size, color_id), bucket in buckets.items()
            if bucket.qty > 0
        ]
        snapshot = StockSnapshot(
            total_quantity=sum(bucket.qty for bucket in buckets.values()),
            entries=entries,
            orphaned_realizations=orphaned,
        )
        return StockLookup(snapshot=snapshot)

    async def compute_stock(
        self,
        product_id: int,
        size_code: Optional[str] = None,
        resolve_color_names: bool = False,
    ) -> StockSnapshot:
        """
        Compute a product's stock snapshot.

        Returns an empty snapshot when a ledger read fails, unless the
        aggregator was built with raise_on_error=True.
        """
        result = await self.lookup(product_id, size_code, resolve_color_names)
        if result.ok:
            return result.snapshot
        if self.raise_on_error:
            raise result.error
        return StockSnapshot()

    async def compute_warehouse_stock(self) -> list[WarehouseStockLine]:
        """
        Compute positive stock for every product in the warehouse.

        Lines are ordered by product, then size.

        Raises:
            StockLookupError: if either ledger (or the product lookup) fails
        """
        try:
            receipts, realizations = await read_ledgers(
                self.ledger.fetch_receipts(None, None, True),
                self.ledger.fetch_realizations(None, None),
            )
            buckets, orphaned = reconcile(
                receipts,
                realizations,
                key=lambda record: (record.product_id, record.size_code, record.color_id),
            )
            stocked = [(key, bucket) for key, bucket in buckets.items() if bucket.qty > 0]
            # Grouped by product, then size; colors keep first-seen receipt order
            stocked.sort(key=lambda item: (item[0][0] is None, item[0][0] or 0, item[0][1]))
            labels = await self.ledger.fetch_product_labels(key[0] for key, _ in stocked)
        except Exception as e:
            logger.error(f"Warehouse stock listing failed: {e}", exc_info=True)
            raise StockLookupError(None, e) from e

        if orphaned:
            logger.warning(f"Warehouse: {orphaned} realization line(s) without matching receipts")

        lines = []
        for (product_id, size_code, color_id), bucket in stocked:
            label = labels.get(product_id)
            lines.append(WarehouseStockLine(
                product_id=product_id,
                name=(label.name if label and label.name else ERROR_UNKNOWN_PRODUCT),
                article=(label.article if label and label.article else ""),
                size_code=size_code,
                color_id=color_id,
                color_name=bucket.color_name or str(color_id),
                qty=bucket.qty,
            ))
        return lines
