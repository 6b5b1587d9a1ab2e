# medibridge/modules/feature_modules/schemas.py
"""Pydantic schemas for feature module toggles."""

from typing import List

from pydantic import Field, model_validator

from medibridge.common.schemas import BridgeModel


class UpdateModulesRequest(BridgeModel):
    """Full replacement set of enabled module keys."""
    modules: List[str] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def wrap_key_list(cls, data):
        # Callers may pass the bare list of keys.
        if isinstance(data, (list, tuple)):
            return {"modules": list(data)}
        return data


class ModuleResponse(BridgeModel):
    key: str
    name: str
    description: str
    icon: str
    enabled: bool
