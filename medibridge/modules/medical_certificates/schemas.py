# medibridge/modules/medical_certificates/schemas.py
"""Medical certificates module Pydantic schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel


class MedicalCertificateCreateRequest(BridgeModel):
    """Request to issue a medical certificate.

    ``days_count`` is worked out by the caller from the date range; the
    backend stores the dates and the count exactly as given.
    """
    patient_id: int
    certificate_type: str = Field(..., min_length=1, description="e.g. sick leave, fitness")
    diagnosis: Optional[str] = None
    from_date: str
    to_date: str
    days_count: int
    restrictions: Optional[str] = None
    additional_notes: Optional[str] = None


class MedicalCertificateResponse(BridgeModel):
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    certificate_type: str
    diagnosis: Optional[str] = None
    from_date: str
    to_date: str
    days_count: int
    restrictions: Optional[str] = None
    additional_notes: Optional[str] = None
    issued_at: Optional[str] = None
