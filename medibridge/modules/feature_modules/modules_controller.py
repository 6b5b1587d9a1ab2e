# medibridge/modules/feature_modules/modules_controller.py
"""Feature modules controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import SuccessResponse

from .schemas import ModuleResponse, UpdateModulesRequest

router = APIRouter(prefix="/modules", tags=["Modules"])


@router.get("", response_model=List[ModuleResponse])
async def get_modules(api: BridgeApi = Depends(get_bridge_api)):
    """List catalog modules with their enabled flag."""
    return await api.modules.get_modules()


@router.put("", response_model=SuccessResponse)
async def update_modules(
    request: UpdateModulesRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Replace the set of enabled modules."""
    return await api.modules.update_modules(request)
