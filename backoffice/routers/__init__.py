"""HTTP routers for the back-office API."""
from .stock import router as stock_router

__all__ = ["stock_router"]
