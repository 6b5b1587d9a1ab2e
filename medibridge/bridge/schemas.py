# medibridge/bridge/schemas.py
"""Pydantic schemas for bridge status routes."""

from pydantic import BaseModel


class BridgeReadyResponse(BaseModel):
    ready: bool
    operations: int
