# medibridge/modules/setup/setup_controller.py
"""Setup controller with API routes."""

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import SuccessResponse

from .schemas import CompleteSetupRequest, ProfileResponse

router = APIRouter(prefix="/setup", tags=["Setup"])


@router.get("/is-complete", response_model=bool)
async def is_setup_complete(api: BridgeApi = Depends(get_bridge_api)):
    """Whether the first-run setup has been completed."""
    return await api.setup.is_complete()


@router.get("/profile", response_model=ProfileResponse)
async def get_profile(api: BridgeApi = Depends(get_bridge_api)):
    """Doctor profile (if any) and the stored module rows."""
    return await api.setup.get_profile()


@router.post("/complete", response_model=SuccessResponse)
async def complete_setup(
    request: CompleteSetupRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Save the setup wizard answers."""
    return await api.setup.complete_setup(request)
