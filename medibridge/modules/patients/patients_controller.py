# medibridge/modules/patients/patients_controller.py
"""Patients controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import PatientCreateRequest, PatientResponse

router = APIRouter(prefix="/patients", tags=["Patients"])


@router.get("", response_model=List[PatientResponse])
async def list_patients(api: BridgeApi = Depends(get_bridge_api)):
    """List all patients, newest first."""
    return await api.patients.list()


@router.post("", response_model=CreatedResponse, status_code=201)
async def add_patient(
    request: PatientCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Register a new patient."""
    return await api.patients.add(request)
