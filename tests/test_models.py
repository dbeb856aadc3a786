"""Tests for ledger models"""
from backoffice.services.models import MovementRecord, ProductLabel


def test_movement_record_from_row():
    """Row fields map onto the record; unknown columns are ignored"""
    record = MovementRecord(**{
        "id": 77,
        "receipt_id": 3,
        "product_id": 10,
        "size_code": "M",
        "color_id": 5,
        "qty": 4,
    })

    assert record.product_id == 10
    assert record.qty == 4
    assert record.color_name is None
    assert record.stock_key == ("M", 5)


def test_movement_record_null_qty():
    """A null quantity counts as zero"""
    record = MovementRecord(size_code="M", color_id=5, qty=None)

    assert record.qty == 0


def test_product_label_optional_fields():
    """Name and article may be missing"""
    label = ProductLabel(id=10)

    assert label.name is None
    assert label.article is None
