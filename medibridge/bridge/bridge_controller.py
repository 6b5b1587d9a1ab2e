# medibridge/bridge/bridge_controller.py
"""Bridge readiness route and the fallback message socket."""

import json
import logging

from fastapi import APIRouter, HTTPException, Request, WebSocket, WebSocketDisconnect

from medibridge.common.utils.global_messages import GlobalMessages
from .message_handler import handle_bridge_message
from .registry import REGISTRY
from .schemas import BridgeReadyResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bridge", tags=["Bridge"])


@router.get("/ready", response_model=BridgeReadyResponse)
async def bridge_ready(request: Request):
    """Report whether the bridge has been exposed; 503 until it has."""
    if not getattr(request.app.state, "bridge_ready", False):
        raise HTTPException(status_code=503, detail=GlobalMessages.BRIDGE_NOT_READY)
    return BridgeReadyResponse(ready=True, operations=len(REGISTRY))


@router.websocket("/ws")
async def bridge_socket(websocket: WebSocket):
    """Fallback channel: tagged JSON call messages in, tagged replies out."""
    await websocket.accept()
    origin = websocket.headers.get("origin")
    allowed_origins = websocket.app.state.settings.BRIDGE_ALLOWED_ORIGINS
    logger.info(f"Bridge socket connected from {origin!r}")

    try:
        while True:
            raw = await websocket.receive_text()
            try:
                data = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning("Ignoring non-JSON bridge message")
                continue

            response = await handle_bridge_message(
                getattr(websocket.app.state, "api", None),
                data,
                origin=origin,
                allowed_origins=allowed_origins,
            )
            if response is not None:
                await websocket.send_text(json.dumps(response))
    except WebSocketDisconnect:
        logger.info(f"Bridge socket from {origin!r} disconnected")
