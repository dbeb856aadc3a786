"""
Database Module - Supabase Client

Provides the singleton async Supabase client and the names of the
tables the stock services read.
"""

import os
from typing import Optional

from supabase._async.client import AsyncClient
from supabase._async.client import create_client as acreate_client

# Environment variables
SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Ledger and lookup tables
RECEIPT_ITEMS_TABLE = "receipt_items"
REALIZATION_ITEMS_TABLE = "realization_items"
PRODUCTS_TABLE = "products"
COLORS_TABLE = "colors"


# Singleton instance
_async_supabase_client: Optional[AsyncClient] = None


async def get_supabase() -> AsyncClient:
    """
    Get async Supabase client (singleton).

    Reads SUPABASE_URL / SUPABASE_SERVICE_ROLE_KEY at call time so scripts
    can load a .env file after import.
    """
    global _async_supabase_client

    if _async_supabase_client is None:
        url = os.environ.get("SUPABASE_URL", SUPABASE_URL)
        key = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", SUPABASE_SERVICE_ROLE_KEY)
        if not url or not key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _async_supabase_client = await acreate_client(url, key)

    return _async_supabase_client


def reset_supabase() -> None:
    """Drop the cached client (after sign-out on shutdown)."""
    global _async_supabase_client
    _async_supabase_client = None
