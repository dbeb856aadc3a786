"""
Supabase Database Service

Provides Database class wiring the ledger repositories to the stock domains.

Usage:
    from backoffice.services.database import get_database

    # In async context (after init_database() called at startup):
    db = get_database()
    snapshot = await db.compute_stock(10)

    # At FastAPI startup (lifespan):
    await init_database()
"""

import asyncio
from typing import Iterable, Optional

from supabase._async.client import AsyncClient

from backoffice.db import get_supabase, reset_supabase
from backoffice.logging import get_logger
from backoffice.services.domains import (
    AvailabilityChecker,
    AvailabilityResult,
    ColorChangeCheck,
    StockAggregator,
    StockLine,
    StockPresence,
    StockSnapshot,
    StockSummary,
    StockValidationReport,
    WarehouseReporter,
    WarehouseStockLine,
)
from backoffice.services.repositories import (
    ProductRepository,
    RealizationRepository,
    ReceiptRepository,
    StockLedger,
)

logger = get_logger(__name__)


class Database:
    """
    Supabase-backed stock services.

    Must be initialized via async factory method `create()` or `init_database()`.
    """

    def __init__(self, client: AsyncClient):
        """Private constructor. Use Database.create() or init_database() instead."""
        self.client = client

        self._receipts_repo = ReceiptRepository(self.client)
        self._realizations_repo = RealizationRepository(self.client)
        self._products_repo = ProductRepository(self.client)
        self.ledger = StockLedger(self._receipts_repo, self._realizations_repo, self._products_repo)

        # Domains
        self.stock_domain = StockAggregator(self.ledger)
        self.availability_domain = AvailabilityChecker(self.stock_domain, self.ledger)
        self.warehouse_domain = WarehouseReporter(self.stock_domain)

    @classmethod
    async def create(cls) -> "Database":
        """Async factory method to create Database instance.

        Raises:
            ValueError: If SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY is not set
        """
        client = await get_supabase()
        return cls(client)

    # ==================== STOCK OPERATIONS (delegated) ====================

    async def compute_stock(
        self,
        product_id: int,
        size_code: Optional[str] = None,
        resolve_color_names: bool = False,
    ) -> StockSnapshot:
        return await self.stock_domain.compute_stock(product_id, size_code, resolve_color_names)

    async def check_availability(
        self,
        product_id: int,
        size_code: str,
        requested_qty: int,
        color_id: Optional[int] = None,
    ) -> AvailabilityResult:
        return await self.availability_domain.check_availability(
            product_id, size_code, requested_qty, color_id
        )

    async def validate_stock_for_items(self, lines: Iterable[StockLine]) -> StockValidationReport:
        return await self.availability_domain.validate_items(lines)

    # ==================== WAREHOUSE OPERATIONS (delegated) ====================

    async def get_stock_summary(self, product_id: int) -> StockSummary:
        return await self.warehouse_domain.get_stock_summary(product_id)

    async def has_any_stock(self, product_id: int) -> StockPresence:
        return await self.warehouse_domain.has_any_stock(product_id)

    async def get_stock_details(
        self,
        product_id: int,
        size_code: Optional[str] = None,
        color_id: Optional[int] = None,
    ) -> StockSummary:
        return await self.warehouse_domain.get_stock_details(product_id, size_code, color_id)

    async def can_change_color(self, product_id: int) -> ColorChangeCheck:
        return await self.warehouse_domain.can_change_color(product_id)

    async def list_warehouse_stock(self) -> list[WarehouseStockLine]:
        return await self.warehouse_domain.list_warehouse_stock()


# Singleton instance (initialized lazily or at startup via init_database())
_db: Database | None = None
_db_lock: Optional[asyncio.Lock] = None  # Lazy lock for thread-safe init


def _get_lock() -> asyncio.Lock:
    """Get or create async lock for thread-safe initialization."""
    global _db_lock
    if _db_lock is None:
        _db_lock = asyncio.Lock()
    return _db_lock


async def init_database() -> Database:
    """Initialize async database singleton.

    Can be called at FastAPI startup (lifespan) or lazily on first use.

    Returns:
        Database instance (also cached as singleton)
    """
    global _db
    if _db is not None:
        return _db

    async with _get_lock():
        # Double-check after acquiring lock
        if _db is None:
            logger.info("Initializing async Supabase client...")
            _db = await Database.create()
            logger.info("Async Supabase client initialized successfully")
    return _db


async def close_database() -> None:
    """Close database connections.

    Should be called at FastAPI shutdown (lifespan).
    """
    global _db
    if _db is not None:
        try:
            await _db.client.auth.sign_out()
        except Exception as e:
            logger.warning(f"Error closing Supabase client: {e}")
        reset_supabase()
        _db = None
        logger.info("Supabase client closed")


async def get_database_async() -> Database:
    """Get database instance with lazy async initialization.

    Use this in scripts where lifespan is not available.
    """
    if _db is None:
        return await init_database()
    return _db


def get_database() -> Database:
    """Get database instance (sync accessor).

    Raises:
        RuntimeError: If database not initialized
    """
    if _db is None:
        raise RuntimeError(
            "Database not initialized. Use 'await get_database_async()' for lazy init, "
            "or call 'await init_database()' at startup."
        )
    return _db


def is_database_initialized() -> bool:
    """Check if database singleton is initialized."""
    return _db is not None
