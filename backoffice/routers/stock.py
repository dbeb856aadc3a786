"""
Stock API Router

Read-only stock endpoints used by order/realization forms, product pages
and the warehouse listing.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException, Query

from backoffice.errors import ERROR_STOCK_LOOKUP_FAILED, StockLookupError
from backoffice.services.database import get_database
from backoffice.services.domains import StockLine
from .models import ValidateStockRequest

router = APIRouter(prefix="/api/stock", tags=["stock"])


@router.get("")
async def list_warehouse_stock():
    """Get every positive stock bucket in the warehouse"""
    db = get_database()
    try:
        items = await db.list_warehouse_stock()
    except StockLookupError:
        raise HTTPException(status_code=500, detail=ERROR_STOCK_LOOKUP_FAILED)
    return {"items": items}


@router.post("/validate")
async def validate_stock(request: ValidateStockRequest):
    """Check order or realization lines against stock"""
    db = get_database()
    lines = [
        StockLine(
            product_id=item.product_id,
            size_code=item.size_code,
            qty=item.qty,
            color_id=item.color_id,
        )
        for item in request.items
    ]
    return await db.validate_stock_for_items(lines)


@router.get("/{product_id}")
async def get_product_stock(
    product_id: int,
    size_code: Optional[str] = None,
    with_color_names: bool = False,
):
    """Get net stock of a product, optionally for one size"""
    db = get_database()
    return await db.compute_stock(product_id, size_code, with_color_names)


@router.get("/{product_id}/summary")
async def get_stock_summary(product_id: int):
    """Get product stock with color names"""
    db = get_database()
    return await db.get_stock_summary(product_id)


@router.get("/{product_id}/presence")
async def get_stock_presence(product_id: int):
    """Check whether a product has any stock"""
    db = get_database()
    return await db.has_any_stock(product_id)


@router.get("/{product_id}/details")
async def get_stock_details(
    product_id: int,
    size_code: Optional[str] = None,
    color_id: Optional[int] = None,
):
    """Get named stock entries for one size and/or color"""
    db = get_database()
    return await db.get_stock_details(product_id, size_code, color_id)


@router.get("/{product_id}/availability")
async def check_availability(
    product_id: int,
    size_code: str,
    qty: int = Query(gt=0),
    color_id: Optional[int] = None,
):
    """Check that qty units of a size/color are on hand"""
    db = get_database()
    return await db.check_availability(product_id, size_code, qty, color_id)


@router.get("/{product_id}/color-change")
async def check_color_change(product_id: int):
    """Check whether the product color may be edited"""
    db = get_database()
    return await db.can_change_color(product_id)
