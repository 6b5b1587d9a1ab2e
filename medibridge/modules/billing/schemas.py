# medibridge/modules/billing/schemas.py
"""Billing module Pydantic schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel


class PaymentCreateRequest(BridgeModel):
    """Request to record a payment received from a patient."""
    patient_id: int
    amount: float = Field(..., description="Amount received, in the record currency")
    payment_method: Optional[str] = None
    notes: Optional[str] = None


class BillingRecordResponse(BridgeModel):
    id: int
    patient_id: int
    patient_name: Optional[str] = None
    amount: float
    currency: str
    status: str
    payment_method: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[str] = None
