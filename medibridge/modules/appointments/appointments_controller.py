# medibridge/modules/appointments/appointments_controller.py
"""Appointments controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import AppointmentCreateRequest, AppointmentResponse

router = APIRouter(prefix="/appointments", tags=["Appointments"])


@router.get("", response_model=List[AppointmentResponse])
async def list_appointments(api: BridgeApi = Depends(get_bridge_api)):
    """List appointments with the patient's name."""
    return await api.appointments.list()


@router.post("", response_model=CreatedResponse, status_code=201)
async def add_appointment(
    request: AppointmentCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Book a new appointment."""
    return await api.appointments.add(request)
