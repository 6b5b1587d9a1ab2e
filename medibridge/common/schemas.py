# medibridge/common/schemas.py
"""Shared Pydantic bases for bridge payloads and results."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BridgeModel(BaseModel):
    """Bridge payloads travel with camelCase keys; Python code uses snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreatedResponse(BaseModel):
    """Identifier of a newly inserted (or upserted) row."""
    id: int


class SuccessResponse(BaseModel):
    success: bool
