# medibridge/modules/inventory/inventory_controller.py
"""Inventory controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import InventoryItemResponse, InventoryUpsertRequest

router = APIRouter(prefix="/inventory", tags=["Inventory"])


@router.get("", response_model=List[InventoryItemResponse])
async def list_inventory(api: BridgeApi = Depends(get_bridge_api)):
    """List stock items by name."""
    return await api.inventory.list()


@router.put("", response_model=CreatedResponse)
async def upsert_inventory_item(
    request: InventoryUpsertRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Create a stock item, or update it when an id is supplied."""
    return await api.inventory.upsert(request)
