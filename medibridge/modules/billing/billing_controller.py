# medibridge/modules/billing/billing_controller.py
"""Billing controller with API routes."""

from typing import List

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api
from medibridge.common.schemas import CreatedResponse

from .schemas import BillingRecordResponse, PaymentCreateRequest

router = APIRouter(prefix="/billing", tags=["Billing"])


@router.get("", response_model=List[BillingRecordResponse])
async def list_billing_records(api: BridgeApi = Depends(get_bridge_api)):
    """List billing records with patient names."""
    return await api.billing.list()


@router.post("/payments", response_model=CreatedResponse, status_code=201)
async def record_payment(
    request: PaymentCreateRequest,
    api: BridgeApi = Depends(get_bridge_api)
):
    """Record a payment; the record is stored as paid."""
    return await api.billing.record_payment(request)
