"""Domain services wrapping the stock ledger."""
from .availability import (
    AvailabilityChecker,
    AvailabilityResult,
    StockLine,
    StockShortage,
    StockValidationReport,
)
from .stock import (
    NetStockEntry,
    StockAggregator,
    StockLookup,
    StockSnapshot,
    WarehouseStockLine,
    reconcile,
)
from .warehouse import ColorChangeCheck, StockPresence, StockSummary, WarehouseReporter

__all__ = [
    # Aggregation
    "StockAggregator",
    "StockLookup",
    "StockSnapshot",
    "NetStockEntry",
    "WarehouseStockLine",
    "reconcile",
    # Availability
    "AvailabilityChecker",
    "AvailabilityResult",
    "StockLine",
    "StockShortage",
    "StockValidationReport",
    # Reporting
    "WarehouseReporter",
    "StockSummary",
    "StockPresence",
    "ColorChangeCheck",
]
