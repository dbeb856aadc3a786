"""
Stock API Pydantic Models

Request bodies for the stock endpoints.
"""
from typing import List, Optional
from pydantic import BaseModel, Field


class StockLineRequest(BaseModel):
    product_id: int
    size_code: str
    color_id: Optional[int] = None
    qty: int = Field(gt=0)


class ValidateStockRequest(BaseModel):
    items: List[StockLineRequest]
