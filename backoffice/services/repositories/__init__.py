"""
Repository Pattern for Database Operations

Provides clean separation of concerns:
- ReceiptRepository: inbound movement ledger (receipt_items)
- RealizationRepository: outbound movement ledger (realization_items)
- ProductRepository: product names and articles
- StockLedger: the three above behind one read interface
"""
from .ledger import StockLedger
from .movement_repo import MovementRepository, RealizationRepository, ReceiptRepository
from .product_repo import ProductRepository

__all__ = [
    "MovementRepository",
    "ReceiptRepository",
    "RealizationRepository",
    "ProductRepository",
    "StockLedger",
]
