# medibridge/modules/medical_certificates/medical_certificates_controller.py
"""Medical certificates controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import MedicalCertificateCreateRequest, MedicalCertificateResponse

router = APIRouter(prefix="/medical-certificates", tags=["Medical Certificates"])


@router.get("", response_model=List[MedicalCertificateResponse])
async def list_certificates(api: BridgeApi = Depends(get_bridge_api)):
    """List issued certificates with patient names."""
    return await api.medical_certificates.list()


@router.post("", response_model=CreatedResponse, status_code=201)
async def add_certificate(
    request: MedicalCertificateCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Issue a medical certificate."""
    return await api.medical_certificates.add(request)
