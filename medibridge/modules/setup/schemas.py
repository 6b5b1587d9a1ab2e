# medibridge/modules/setup/schemas.py
"""Pydantic schemas for the first-run setup module."""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from medibridge.common.schemas import BridgeModel
from medibridge.models.models import PracticeType


class CompleteSetupRequest(BridgeModel):
    """Answers collected by the setup wizard."""
    name: str = Field(..., min_length=1, description="Doctor's display name")
    specialty: str = Field(..., min_length=1)
    practice_type: PracticeType
    centre_name: Optional[str] = None
    location: Optional[str] = None
    password: Optional[str] = Field(None, description="Optional UI lock password, stored as entered")
    modules: Optional[List[str]] = Field(
        None, description="Module keys to enable; defaults to the practice type's recommendations"
    )

    @field_validator("centre_name", "location", mode="before")
    def strip_optional_text(cls, value):
        if isinstance(value, str):
            value = value.strip()
            return value or None
        return value


class DoctorProfileResponse(BridgeModel):
    id: int
    name: str
    specialty: str
    practice_type: str
    centre_name: Optional[str] = None
    location: Optional[str] = None
    password: Optional[str] = None
    created_at: Optional[str] = None


class ModuleConfigResponse(BaseModel):
    key: str
    enabled: int
    metadata: Optional[str] = None


class ProfileResponse(BaseModel):
    profile: Optional[DoctorProfileResponse] = None
    modules: List[ModuleConfigResponse]
