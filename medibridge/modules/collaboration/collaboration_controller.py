# Collaboration Controller

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import CollaborationNoteCreateRequest, CollaborationNoteResponse

router = APIRouter(prefix="/collaboration", tags=["Collaboration"])


@router.get("", response_model=List[CollaborationNoteResponse])
async def list_notes(api: BridgeApi = Depends(get_bridge_api)):
    """List shared notes, newest first."""
    return await api.collaboration.list()


@router.post("", response_model=CreatedResponse, status_code=201)
async def add_note(
    request: CollaborationNoteCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Post a note to the shared feed."""
    return await api.collaboration.add(request)
