# medibridge/modules/analytics/schemas.py
"""Pydantic schemas for the analytics overview."""

from typing import List, Optional

from pydantic import BaseModel


class OverviewTotals(BaseModel):
    totalPatients: int
    upcomingAppointments: int
    completedAppointments: int
    revenueLKR: float


class MedicationCount(BaseModel):
    medication: Optional[str] = None
    count: int


class AnalyticsOverviewResponse(BaseModel):
    totals: OverviewTotals
    topMedications: List[MedicationCount]
