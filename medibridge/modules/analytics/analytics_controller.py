# medibridge/modules/analytics/analytics_controller.py
"""Analytics controller with API routes."""

from fastapi import APIRouter, Depends

from medibridge.bridge.api import BridgeApi, get_bridge_api

from .schemas import AnalyticsOverviewResponse

router = APIRouter(prefix="/analytics", tags=["Analytics"])


@router.get("/overview", response_model=AnalyticsOverviewResponse)
async def get_overview(api: BridgeApi = Depends(get_bridge_api)):
    """Patient, appointment and revenue totals with top medications."""
    return await api.analytics.overview()
