# medibridge/modules/appointments/schemas.py
"""Appointments module Pydantic schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel


# ============================================================================
# REQUEST SCHEMAS
# ============================================================================

class AppointmentCreateRequest(BridgeModel):
    """Request to book an appointment for a patient."""
    patient_id: int
    scheduled_for: str = Field(..., min_length=1, description="Scheduled date and time as entered")
    doctor_notes: Optional[str] = None
    clinic_room: Optional[str] = None


# ============================================================================
# RESPONSE SCHEMAS
# ============================================================================

class AppointmentResponse(BridgeModel):
    """Appointment row joined with the patient's name."""
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    scheduled_for: str
    status: str
    doctor_notes: Optional[str] = None
    clinic_room: Optional[str] = None
    created_at: Optional[str] = None
