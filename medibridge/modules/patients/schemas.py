# medibridge/modules/patients/schemas.py
"""Patients module Pydantic schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel


class PatientCreateRequest(BridgeModel):
    """Request to register a new patient."""
    full_name: str = Field(..., min_length=1, description="Patient's full name")
    nic: Optional[str] = Field(None, description="National identity card number")
    contact: Optional[str] = None
    dob: Optional[str] = Field(None, description="Date of birth as entered")
    allergies: Optional[str] = None
    notes: Optional[str] = None


class PatientResponse(BridgeModel):
    """Patient row as listed to the UI."""
    id: int
    full_name: str
    nic: Optional[str] = None
    contact: Optional[str] = None
    dob: Optional[str] = None
    allergies: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
