"""
Retail Back-Office Stock Module

This package contains the stock reconciliation engine:
- db: Supabase client singletons
- services.repositories: read access to the receipt/realization ledgers
- services.domains: stock aggregation, availability checks, warehouse reports
- routers: thin FastAPI routes over the stock services

Note: Imports are lazy to avoid circular dependency issues
and ensure clean module loading in serverless environments.
"""

__all__ = [
    "get_supabase",
    "get_database",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "get_supabase":
        from backoffice.db import get_supabase
        return get_supabase
    if name == "get_database":
        from backoffice.services.database import get_database
        return get_database
    raise AttributeError(f"module 'backoffice' has no attribute '{name}'")
