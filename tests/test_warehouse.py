"""Tests for warehouse stock views"""
import pytest

from backoffice.services.domains import StockAggregator, WarehouseReporter
from conftest import FakeLedger, movement


def make_reporter(ledger):
    return WarehouseReporter(StockAggregator(ledger))


@pytest.mark.asyncio
async def test_stock_summary_has_color_names(stocked_ledger):
    """Summary covers all sizes with color names"""
    summary = await make_reporter(stocked_ledger).get_stock_summary(10)

    assert summary.total_quantity == 12
    assert [(e.size_code, e.color_id, e.qty, e.color_name) for e in summary.entries] == [
        ("M", 5, 8, "Red"),
        ("M", 6, 4, "Blue"),
    ]
    assert stocked_ledger.receipt_calls == [(10, None, True)]


@pytest.mark.asyncio
async def test_has_any_stock(stocked_ledger):
    """Stocked product reports its total"""
    presence = await make_reporter(stocked_ledger).has_any_stock(10)

    assert presence.has_stock is True
    assert presence.total_quantity == 12
    assert len(presence.entries) == 2
    assert all(e.color_name is None for e in presence.entries)


@pytest.mark.asyncio
async def test_no_receipts_has_no_stock(fake_ledger):
    """Product without receipts has no stock"""
    presence = await make_reporter(fake_ledger).has_any_stock(20)

    assert presence.has_stock is False
    assert presence.total_quantity == 0
    assert presence.entries == []


@pytest.mark.asyncio
async def test_fully_realized_product_has_no_stock():
    """Everything received was realized"""
    ledger = FakeLedger(
        receipts=[movement(3, "M", 1, 2)],
        realizations=[movement(3, "M", 1, 2)],
    )

    presence = await make_reporter(ledger).has_any_stock(3)

    assert presence.has_stock is False


@pytest.mark.asyncio
async def test_read_failure_looks_empty(stocked_ledger):
    """Reporter inherits the fail-to-empty policy"""
    stocked_ledger.receipts_error = ConnectionError("timeout")

    summary = await make_reporter(stocked_ledger).get_stock_summary(10)

    assert summary.total_quantity == 0
    assert summary.entries == []


class TestStockDetails:
    """Tests for filtered details"""

    @pytest.mark.asyncio
    async def test_filter_by_color(self, stocked_ledger):
        details = await make_reporter(stocked_ledger).get_stock_details(10, color_id=6)

        assert details.total_quantity == 4
        assert [(e.size_code, e.color_name) for e in details.entries] == [("M", "Blue")]

    @pytest.mark.asyncio
    async def test_filter_by_size(self, stocked_ledger):
        details = await make_reporter(stocked_ledger).get_stock_details(10, size_code="L")

        assert details.total_quantity == 0
        assert details.entries == []
        assert stocked_ledger.receipt_calls == [(10, "L", True)]


class TestColorChange:
    """Tests for the color edit gate"""

    @pytest.mark.asyncio
    async def test_blocked_while_stocked(self, stocked_ledger):
        check = await make_reporter(stocked_ledger).can_change_color(10)

        assert check.can_change is False
        assert "12" in check.reason
        assert check.stock_info.total_quantity == 12
        assert len(check.stock_info.entries) == 2

    @pytest.mark.asyncio
    async def test_allowed_without_stock(self, fake_ledger):
        check = await make_reporter(fake_ledger).can_change_color(20)

        assert check.can_change is True
        assert check.reason is None
        assert check.stock_info is None


@pytest.mark.asyncio
async def test_list_warehouse_stock(stocked_ledger):
    """Listing delegates to the aggregator"""
    lines = await make_reporter(stocked_ledger).list_warehouse_stock()

    assert sum(line.qty for line in lines) == 12
