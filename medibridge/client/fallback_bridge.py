# medibridge/client/fallback_bridge.py
"""
Fallback client transport: calls travel as tagged messages over a channel,
and replies are matched to their callers by request id.

Replies may arrive in any order. A call that gets no reply within the call
timeout fails and its pending entry is removed; a reply that arrives later
is ignored.
"""

import asyncio
import json
import logging
import secrets
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Protocol, Sequence

import websockets
from websockets.exceptions import ConnectionClosed

from medibridge.bridge.protocol import (
    BRIDGE_SOURCE, RESPONSE_TYPE, BridgeCall, BridgeCallable, BridgeSurface, OperationSpec, to_wire,
)
from medibridge.common.utils.global_messages import GlobalMessages
from .errors import BridgeCallError, BridgeUnavailableError

logger = logging.getLogger(__name__)

MessageHandler = Callable[[Any], bool]


class MessageChannel(Protocol):
    def bind(self, handler: MessageHandler) -> None: ...

    async def send(self, message: Dict[str, Any]) -> None: ...

    async def aclose(self) -> None: ...


def generate_request_id() -> str:
    return f"{BRIDGE_SOURCE}-{int(time.time() * 1000)}-{secrets.token_hex(6)}"


@dataclass
class PendingCall:
    future: asyncio.Future
    timer: asyncio.TimerHandle
    path: str


class FallbackBridge(BridgeSurface):
    """Message-passing rendition of the bridge surface."""

    def __init__(self, channel: MessageChannel, call_timeout_ms: int):
        self._channel = channel
        self._call_timeout = call_timeout_ms / 1000
        self._pending: Dict[str, PendingCall] = {}
        super().__init__(self._caller)
        channel.bind(self.handle_message)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _caller(self, spec: OperationSpec) -> BridgeCallable:
        async def call(payload=None):
            args = [] if payload is None else [to_wire(payload)]
            return await self.invoke(spec.segments, args)

        call.__name__ = spec.attribute[1]
        return call

    async def invoke(self, path: Sequence[str], args: Sequence[Any] = ()) -> Any:
        """Send one call and wait for its reply."""
        if not path:
            raise BridgeCallError(GlobalMessages.BRIDGE_ROOT_NOT_CALLABLE)

        loop = asyncio.get_running_loop()
        request_id = generate_request_id()
        dotted = ".".join(path)

        future = loop.create_future()
        timer = loop.call_later(self._call_timeout, self._expire, request_id)
        self._pending[request_id] = PendingCall(future=future, timer=timer, path=dotted)

        message = BridgeCall(request_id=request_id, path=list(path), args=list(args))
        logger.info(f"Sending bridge call {request_id} for {dotted}")

        try:
            await self._channel.send(message.model_dump(by_alias=True, mode="json"))
        except Exception as e:
            self._discard(request_id)
            raise BridgeUnavailableError() from e

        try:
            return await future
        except asyncio.CancelledError:
            self._discard(request_id)
            raise

    def handle_message(self, data: Any) -> bool:
        """Settle the pending call a reply belongs to; False if it matched none."""
        if not isinstance(data, dict):
            return False
        if data.get("source") != BRIDGE_SOURCE or data.get("type") != RESPONSE_TYPE:
            return False

        request_id = data.get("requestId")
        pending = self._pending.pop(request_id, None) if request_id else None
        if pending is None:
            return False

        pending.timer.cancel()
        if pending.future.done():
            return False

        if data.get("success"):
            logger.info(f"Bridge response for {request_id}: success")
            pending.future.set_result(data.get("result"))
        else:
            error = data.get("error") or GlobalMessages.BRIDGE_CALL_FAILED
            logger.error(f"Bridge response for {request_id}: error - {error}")
            pending.future.set_exception(BridgeCallError(error))
        return True

    def _expire(self, request_id: str) -> None:
        pending = self._pending.pop(request_id, None)
        if pending is None or pending.future.done():
            return
        logger.error(f"Timeout for bridge call {request_id} ({pending.path})")
        pending.future.set_exception(BridgeUnavailableError(GlobalMessages.BRIDGE_TIMEOUT))

    def _discard(self, request_id: str) -> None:
        pending = self._pending.pop(request_id, None)
        if pending is not None:
            pending.timer.cancel()

    async def aclose(self) -> None:
        for request_id in list(self._pending):
            pending = self._pending.pop(request_id)
            pending.timer.cancel()
            if not pending.future.done():
                pending.future.set_exception(BridgeUnavailableError())
        await self._channel.aclose()


class WebSocketChannel:
    """Message channel over the backend's ``/bridge/ws`` socket.

    Connects lazily on the first send; a reader task hands every incoming
    message to the bound handler.
    """

    def __init__(self, url: str, origin: Optional[str] = None):
        self._url = url
        self._origin = origin
        self._handler: Optional[MessageHandler] = None
        self._connection = None
        self._reader: Optional[asyncio.Task] = None
        self._connect_lock: Optional[asyncio.Lock] = None

    def bind(self, handler: MessageHandler) -> None:
        self._handler = handler

    async def send(self, message: Dict[str, Any]) -> None:
        connection = await self._ensure_connected()
        await connection.send(json.dumps(message))

    async def _ensure_connected(self):
        if self._connect_lock is None:
            self._connect_lock = asyncio.Lock()

        async with self._connect_lock:
            if self._connection is None:
                logger.info(f"Opening bridge socket {self._url}")
                self._connection = await websockets.connect(self._url, origin=self._origin)
                self._reader = asyncio.create_task(self._read(self._connection))
            return self._connection

    async def _read(self, connection) -> None:
        try:
            async for raw in connection:
                try:
                    data = json.loads(raw)
                except json.JSONDecodeError:
                    logger.warning("Ignoring non-JSON bridge reply")
                    continue
                if self._handler is not None:
                    self._handler(data)
        except ConnectionClosed as e:
            logger.warning(f"Bridge socket closed: {e}")
        finally:
            if self._connection is connection:
                self._connection = None

    async def aclose(self) -> None:
        connection, self._connection = self._connection, None
        reader, self._reader = self._reader, None
        if connection is not None:
            await connection.close()
        if reader is not None:
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass
