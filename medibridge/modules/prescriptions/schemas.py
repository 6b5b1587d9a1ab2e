# medibridge/modules/prescriptions/schemas.py
"""Prescriptions module Pydantic schemas."""

from typing import Optional

from medibridge.common.schemas import BridgeModel


class PrescriptionCreateRequest(BridgeModel):
    """Request to issue a prescription."""
    patient_id: int
    diagnosis: str
    medication: str
    dosage: str
    duration: str


class PrescriptionResponse(BridgeModel):
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    diagnosis: Optional[str] = None
    medication: Optional[str] = None
    dosage: Optional[str] = None
    duration: Optional[str] = None
    issued_at: Optional[str] = None
