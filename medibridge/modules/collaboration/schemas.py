# medibridge/modules/collaboration/schemas.py
"""Collaboration notes schemas."""

from typing import Optional
from pydantic import Field

from medibridge.common.schemas import BridgeModel


class CollaborationNoteCreateRequest(BridgeModel):
    author: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1)
    tag: Optional[str] = None


class CollaborationNoteResponse(BridgeModel):
    id: int
    author: str
    message: str
    tag: Optional[str] = None
    created_at: Optional[str] = None
