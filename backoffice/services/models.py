"""Database Models - Pydantic models for ledger rows and catalog lookups."""
from typing import Optional
from pydantic import BaseModel, field_validator


class MovementRecord(BaseModel):
    """One receipt or realization line.

    Direction is implied by the ledger the row came from; qty is always
    stored as a positive number.
    """
    product_id: Optional[int] = None
    size_code: str
    color_id: Optional[int] = None
    qty: int = 0
    color_name: Optional[str] = None  # Only set when the query joined colors

    class Config:
        extra = "ignore"  # Ignore unknown fields from DB

    @field_validator("qty", mode="before")
    @classmethod
    def missing_qty_is_zero(cls, v):
        return 0 if v is None else v

    @property
    def stock_key(self) -> tuple[str, Optional[int]]:
        return (self.size_code, self.color_id)


class ProductLabel(BaseModel):
    """Product name and article used in warehouse listings."""
    id: int
    name: Optional[str] = None
    article: Optional[str] = None

    class Config:
        extra = "ignore"
