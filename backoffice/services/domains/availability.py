"""
Availability Domain Service

Answers "is there enough stock for this request" before orders and
realizations are created. Fails closed: if stock cannot be read the
request is reported as unavailable.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from backoffice.errors import (
    ERROR_COLOR_REQUIRED,
    ERROR_INSUFFICIENT_STOCK,
    ERROR_STOCK_CHECK_FAILED,
    ERROR_UNKNOWN_PRODUCT,
    AmbiguousStockMatchError,
)
from backoffice.logging import get_logger, sanitize_string_for_logging

from .stock import StockAggregator, StockSnapshot

logger = get_logger(__name__)


@dataclass
class AvailabilityResult:
    """Stock availability check result."""

    available: bool
    available_qty: int
    requested_qty: int
    product_name: str | None = None
    message: str | None = None


@dataclass
class StockLine:
    """One requested line of an order or realization."""

    product_id: int
    size_code: str
    qty: int
    color_id: int | None = None


@dataclass
class StockShortage:
    """A requested line that cannot be served from stock."""

    product_id: int
    size_code: str
    color_id: int | None
    requested_qty: int
    available_qty: int
    product_name: str | None
    message: str


@dataclass
class StockValidationReport:
    """Outcome of checking every line of a document against stock."""

    valid: bool
    errors: list[StockShortage] = field(default_factory=list)


def _pick_entry_qty(
    snapshot: StockSnapshot,
    product_id: int,
    size_code: str,
    color_id: Optional[int],
) -> int:
    if color_id is not None:
        entry = snapshot.find(size_code, color_id)
        return entry.qty if entry else 0

    candidates = snapshot.entries_for_size(size_code)
    if len(candidates) > 1:
        raise AmbiguousStockMatchError(product_id, size_code, [e.color_id for e in candidates])
    return candidates[0].qty if candidates else 0


class AvailabilityChecker:
    """
    Availability checks on top of the stock aggregator.

    Provides:
    - Single (product, size, color) checks
    - Whole-document validation (order / realization lines)
    """

    def __init__(self, aggregator: StockAggregator, ledger):
        self.aggregator = aggregator
        self.ledger = ledger

    async def _product_name(self, product_id: int) -> str | None:
        try:
            return await self.ledger.fetch_product_name(product_id)
        except Exception as e:
            # Name is only cosmetic; the check itself can still be answered
            logger.warning(f"Product name lookup failed for {product_id}: {e}")
            return None

    async def check_availability(
        self,
        product_id: int,
        size_code: str,
        requested_qty: int,
        color_id: Optional[int] = None,
    ) -> AvailabilityResult:
        """
        Check that requested_qty units of (product, size, color) are on hand.

        When color_id is omitted the size must be stocked in at most one
        color; several stocked colors make the request ambiguous and it is
        refused.

        Args:
            product_id: Product ID
            size_code: Size code
            requested_qty: Units requested (callers guarantee > 0)
            color_id: Color ID

        Returns:
            AvailabilityResult; never raises
        """
        try:
            lookup = await self.aggregator.lookup(product_id, size_code)
            snapshot = lookup.unwrap()
            available_qty = _pick_entry_qty(snapshot, product_id, size_code, color_id)
        except AmbiguousStockMatchError as e:
            logger.warning(
                f"Ambiguous stock match for product {product_id} "
                f"size {sanitize_string_for_logging(size_code)}: "
                f"{len(e.color_ids)} colors stocked, none requested"
            )
            return AvailabilityResult(
                available=False,
                available_qty=0,
                requested_qty=requested_qty,
                message=(
                    f"{ERROR_COLOR_REQUIRED}: size {size_code} is stocked "
                    f"in {len(e.color_ids)} colors"
                ),
            )
        except Exception as e:
            logger.error(
                f"Stock check failed for product {product_id} "
                f"size {sanitize_string_for_logging(size_code)}: {e}",
                exc_info=True,
            )
            return AvailabilityResult(
                available=False,
                available_qty=0,
                requested_qty=requested_qty,
                message=ERROR_STOCK_CHECK_FAILED,
            )

        product_name = await self._product_name(product_id)
        available = available_qty >= requested_qty

        message = None
        if not available:
            message = (
                f'{ERROR_INSUFFICIENT_STOCK} for "{product_name or ERROR_UNKNOWN_PRODUCT}". '
                f"Requested: {requested_qty}, available: {available_qty}"
            )

        return AvailabilityResult(
            available=available,
            available_qty=available_qty,
            requested_qty=requested_qty,
            product_name=product_name,
            message=message,
        )

    async def validate_items(self, lines: Iterable[StockLine]) -> StockValidationReport:
        """
        Check every line of an order or realization against stock.

        Lines are checked independently, in order. Two lines for the same
        bucket are each compared with the full on-hand quantity.
        """
        errors: list[StockShortage] = []

        for line in lines:
            check = await self.check_availability(
                line.product_id, line.size_code, line.qty, line.color_id
            )
            if check.available:
                continue
            errors.append(StockShortage(
                product_id=line.product_id,
                size_code=line.size_code,
                color_id=line.color_id,
                requested_qty=line.qty,
                available_qty=check.available_qty,
                product_name=check.product_name,
                message=check.message or ERROR_INSUFFICIENT_STOCK,
            ))

        if errors:
            logger.info(f"Stock validation rejected {len(errors)} line(s)")
        return StockValidationReport(valid=not errors, errors=errors)
