# medibridge/modules/prescriptions/prescriptions_controller.py
"""Prescriptions controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import PrescriptionCreateRequest, PrescriptionResponse

router = APIRouter(prefix="/prescriptions", tags=["Prescriptions"])


@router.get("", response_model=List[PrescriptionResponse])
async def list_prescriptions(api: BridgeApi = Depends(get_bridge_api)):
    """List issued prescriptions, most recent first."""
    return await api.prescriptions.list()


@router.post("", response_model=CreatedResponse, status_code=201)
async def add_prescription(
    request: PrescriptionCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Issue a prescription."""
    return await api.prescriptions.add(request)
