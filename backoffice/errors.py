"""
Stock Errors

Centralized error messages (SonarQube S1192) and the exception types
raised inside the stock services.
"""

# Availability errors
ERROR_STOCK_CHECK_FAILED = "Stock check failed"
ERROR_INSUFFICIENT_STOCK = "Insufficient stock"
ERROR_UNKNOWN_PRODUCT = "Unknown product"
ERROR_COLOR_REQUIRED = "Color must be specified"

# Reporting errors
ERROR_STOCK_LOOKUP_FAILED = "Failed to load stock movements"
ERROR_COLOR_CHANGE_BLOCKED = "Cannot change product color"


class StockError(Exception):
    """Base class for stock service errors."""


class StockLookupError(StockError):
    """A ledger fetch failed while computing stock."""

    def __init__(self, product_id: int | None, cause: BaseException | str):
        self.product_id = product_id
        self.cause = cause
        target = f"product {product_id}" if product_id is not None else "warehouse"
        super().__init__(f"{ERROR_STOCK_LOOKUP_FAILED} for {target}: {cause}")


class AmbiguousStockMatchError(StockError):
    """Several colors are stocked for a size and no color was given."""

    def __init__(self, product_id: int, size_code: str, color_ids: list[int]):
        self.product_id = product_id
        self.size_code = size_code
        self.color_ids = color_ids
        super().__init__(
            f"{ERROR_COLOR_REQUIRED}: product {product_id} size {size_code} "
            f"is stocked in {len(color_ids)} colors"
        )
