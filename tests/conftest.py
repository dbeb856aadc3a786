"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")

from backoffice.services.models import MovementRecord, ProductLabel


def movement(product_id, size_code, color_id, qty, color_name=None):
    """Build a ledger line"""
    return MovementRecord(
        product_id=product_id,
        size_code=size_code,
        color_id=color_id,
        qty=qty,
        color_name=color_name,
    )


class FakeLedger:
    """In-memory receipt/realization ledgers with the StockLedger interface"""

    def __init__(self, receipts=None, realizations=None, product_names=None, articles=None):
        self.receipts = list(receipts or [])
        self.realizations = list(realizations or [])
        self.product_names = dict(product_names or {})
        self.articles = dict(articles or {})
        self.receipts_error = None
        self.realizations_error = None
        self.name_error = None
        self.receipt_calls = []

    @staticmethod
    def _select(records, product_id, size_code):
        return [
            r for r in records
            if (product_id is None or r.product_id == product_id)
            and (not size_code or r.size_code == size_code)
        ]

    async def fetch_receipts(self, product_id=None, size_code=None, with_color_names=False):
        self.receipt_calls.append((product_id, size_code, with_color_names))
        if self.receipts_error:
            raise self.receipts_error
        rows = self._select(self.receipts, product_id, size_code)
        if not with_color_names:
            rows = [r.model_copy(update={"color_name": None}) for r in rows]
        return rows

    async def fetch_realizations(self, product_id=None, size_code=None):
        if self.realizations_error:
            raise self.realizations_error
        return self._select(self.realizations, product_id, size_code)

    async def fetch_product_name(self, product_id):
        if self.name_error:
            raise self.name_error
        return self.product_names.get(product_id)

    async def fetch_product_labels(self, product_ids):
        return {
            pid: ProductLabel(id=pid, name=self.product_names.get(pid), article=self.articles.get(pid))
            for pid in set(product_ids)
            if pid in self.product_names
        }


@pytest.fixture
def fake_ledger():
    """Empty in-memory ledger"""
    return FakeLedger()


@pytest.fixture
def stocked_ledger():
    """Ledger for product 10 with three size/color buckets"""
    return FakeLedger(
        receipts=[
            movement(10, "M", 5, 10, "Red"),
            movement(10, "M", 6, 4, "Blue"),
            movement(10, "L", 5, 3, "Red"),
            movement(10, "M", 5, 2, "Crimson"),
        ],
        realizations=[
            movement(10, "M", 5, 4),
            movement(10, "L", 5, 3),
        ],
        product_names={10: "Linen shirt"},
        articles={10: "LS-10"},
    )


@pytest.fixture
def mock_supabase_client():
    """Mock async Supabase client; every builder call returns the same query"""
    client = Mock()

    query = Mock()
    for method in ("select", "eq", "in_", "order", "range", "limit"):
        getattr(query, method).return_value = query
    query.execute = AsyncMock(return_value=Mock(data=[]))

    client.table.return_value = query
    return client
