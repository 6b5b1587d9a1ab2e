# medibridge/modules/inventory/schemas.py
"""Inventory module Pydantic schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel
from medibridge.models.models import DEFAULT_REORDER_LEVEL


class InventoryUpsertRequest(BridgeModel):
    """Insert a stock item, or update it when ``id`` is given."""
    id: Optional[int] = Field(None, description="Existing item id; omit to create a new item")
    item_name: str = Field(..., min_length=1)
    sku: Optional[str] = None
    quantity: int = 0
    reorder_level: int = DEFAULT_REORDER_LEVEL
    supplier: Optional[str] = None
    unit_price: Optional[float] = None


class InventoryItemResponse(BridgeModel):
    id: int
    item_name: str
    sku: Optional[str] = None
    quantity: int
    reorder_level: int
    supplier: Optional[str] = None
    unit_price: Optional[float] = None
    updated_at: Optional[str] = None
