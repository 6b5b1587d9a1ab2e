# medibridge/bridge/message_handler.py
"""
Server side of the fallback bridge.

Turns a tagged ``bridge-call`` message into a call on the capability object
and builds the matching ``bridge-response``. Messages that are not bridge
calls, or that come from an untrusted origin, are ignored.
"""

import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from pydantic import ValidationError

from medibridge.common.utils.global_messages import GlobalMessages
from .protocol import (
    BRIDGE_SOURCE, CALL_TYPE, WILDCARD_ORIGIN, BridgeCall, BridgeResponse, BridgeSurface,
)

logger = logging.getLogger(__name__)


def is_bridge_call(data: Any) -> bool:
    return (
        isinstance(data, Mapping)
        and data.get("source") == BRIDGE_SOURCE
        and data.get("type") == CALL_TYPE
    )


def is_trusted_origin(origin: Optional[str], allowed_origins: Sequence[str]) -> bool:
    if WILDCARD_ORIGIN in allowed_origins:
        return True
    return origin is not None and origin in allowed_origins


def reply_origin(origin: Optional[str]) -> str:
    """Replies target the caller's origin, or any origin when it is opaque."""
    if not origin or origin == "null":
        return WILDCARD_ORIGIN
    return origin


def _error_message(error: Exception) -> str:
    if isinstance(error, ValidationError):
        return f"Invalid payload: {error.error_count()} validation error(s): " + "; ".join(
            f"{'.'.join(str(part) for part in detail['loc'])}: {detail['msg']}"
            for detail in error.errors()
        )
    return str(error) or GlobalMessages.BRIDGE_CALL_FAILED


async def handle_bridge_message(
    api: Optional[BridgeSurface],
    data: Any,
    *,
    origin: Optional[str],
    allowed_origins: Sequence[str],
) -> Optional[Dict[str, Any]]:
    """Dispatch one fallback message; returns the reply, or ``None`` if ignored."""
    if not is_bridge_call(data):
        return None

    if not is_trusted_origin(origin, allowed_origins):
        logger.warning(f"Ignoring bridge call from untrusted origin {origin!r}")
        return None

    try:
        call = BridgeCall.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Ignoring malformed bridge call: {e}")
        return None

    target_origin = reply_origin(origin)
    dotted = ".".join(call.path)
    logger.info(f"Bridge call {call.request_id} for {dotted}")

    try:
        if api is None:
            raise RuntimeError(GlobalMessages.BRIDGE_NOT_READY)
        function = api.resolve(call.path)
        result = await function(*call.args)
    except Exception as e:
        message = _error_message(e)
        logger.error(f"Bridge call {call.request_id} for {dotted} failed: {message}")
        response = BridgeResponse(
            request_id=call.request_id,
            success=False,
            error=message,
            target_origin=target_origin,
        )
    else:
        response = BridgeResponse(
            request_id=call.request_id,
            success=True,
            result=result,
            target_origin=target_origin,
        )

    return response.model_dump(by_alias=True, mode="json", exclude_none=True)
