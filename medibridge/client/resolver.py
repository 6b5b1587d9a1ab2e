# medibridge/client/resolver.py
"""
Resolves the bridge a caller should use.

Order: a cached bridge, the in-process bridge when this process is serving
one, the HTTP bridge once the backend reports ready, and finally the
message-channel fallback. The first bridge found is cached.
"""

import asyncio
import logging
from typing import Optional

import httpx

from medibridge.bridge.api import BRIDGE_READY, get_exposed_api
from medibridge.bridge.protocol import BridgeSurface
from medibridge.common.config import Settings, settings
from .errors import BridgeUnavailableError
from .fallback_bridge import FallbackBridge, MessageChannel, WebSocketChannel
from .http_bridge import HttpBridge, probe_ready

logger = logging.getLogger(__name__)

MIN_PROBE_TIMEOUT = 0.25


class BridgeResolver:
    def __init__(
        self,
        app_settings: Settings = settings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        channel: Optional[MessageChannel] = None,
    ):
        self._settings = app_settings
        self._http_client = http_client
        self._channel = channel
        self._cached: Optional[BridgeSurface] = None
        self._fallback: Optional[FallbackBridge] = None

    @property
    def cached(self) -> Optional[BridgeSurface]:
        return self._cached

    def locate(self) -> Optional[BridgeSurface]:
        """The bridge available right now without any I/O, if any."""
        if self._cached is not None:
            return self._cached

        exposed = get_exposed_api()
        if exposed is not None:
            self._cached = exposed
        elif self._fallback is not None:
            self._cached = self._fallback

        return self._cached

    def get_api(self) -> Optional[BridgeSurface]:
        return self.locate()

    def require_api(self) -> BridgeSurface:
        """Resolve a bridge now, falling back to the message channel."""
        api = self.locate()
        if api is not None:
            return api

        fallback = self._ensure_fallback()
        self._cached = fallback
        return fallback

    async def wait_for_api(
        self,
        timeout_ms: Optional[int] = None,
        poll_interval_ms: Optional[int] = None,
    ) -> BridgeSurface:
        """Wait for the in-process or HTTP bridge, then fall back.

        Checks once immediately, on every poll interval, and whenever the
        bridge-ready signal fires. A poll interval of 0 disables polling.
        """
        if timeout_ms is None:
            timeout_ms = self._settings.BRIDGE_WAIT_TIMEOUT_MS
        if poll_interval_ms is None:
            poll_interval_ms = self._settings.BRIDGE_POLL_INTERVAL_MS

        existing = self.locate()
        if existing is not None:
            logger.info("Bridge already available")
            return existing

        loop = asyncio.get_running_loop()
        ready = asyncio.Event()

        def on_ready():
            loop.call_soon_threadsafe(ready.set)

        BRIDGE_READY.add_listener(on_ready)
        deadline = loop.time() + timeout_ms / 1000
        poll_interval = poll_interval_ms / 1000

        try:
            while True:
                remaining = deadline - loop.time()
                probe_timeout = min(max(poll_interval, MIN_PROBE_TIMEOUT), max(remaining, 0.0))
                api = await self._try_resolve(probe_timeout)
                if api is not None:
                    return api

                remaining = deadline - loop.time()
                if remaining <= 0:
                    break

                wait = min(poll_interval, remaining) if poll_interval > 0 else remaining
                try:
                    await asyncio.wait_for(ready.wait(), wait)
                except asyncio.TimeoutError:
                    continue
                logger.info("Bridge-ready signal received")
                ready.clear()
        finally:
            BRIDGE_READY.remove_listener(on_ready)

        logger.warning("Direct bridge timeout, using message fallback")
        fallback = self._ensure_fallback()
        self._cached = fallback
        return fallback

    async def _try_resolve(self, probe_timeout: float) -> Optional[BridgeSurface]:
        api = self.locate()
        if api is not None:
            return api

        client = self._ensure_http_client()
        if client is None or probe_timeout <= 0:
            return None

        if await probe_ready(client, timeout=probe_timeout):
            logger.info(f"HTTP bridge ready at {client.base_url}")
            self._cached = HttpBridge(client)
            return self._cached

        return None

    def _ensure_http_client(self) -> Optional[httpx.AsyncClient]:
        if self._http_client is None and self._settings.BRIDGE_URL:
            self._http_client = httpx.AsyncClient(base_url=self._settings.BRIDGE_URL)
        return self._http_client

    def _ensure_fallback(self) -> FallbackBridge:
        if self._fallback is not None:
            return self._fallback

        channel = self._channel
        if channel is None:
            if not self._settings.BRIDGE_URL:
                raise BridgeUnavailableError()
            channel = WebSocketChannel(self._settings.bridge_ws_url, origin=self._settings.BRIDGE_ORIGIN)
            self._channel = channel

        logger.info("Creating message fallback bridge")
        self._fallback = FallbackBridge(channel, self._settings.BRIDGE_CALL_TIMEOUT_MS)
        return self._fallback

    async def aclose(self) -> None:
        if self._fallback is not None:
            await self._fallback.aclose()
        elif self._channel is not None:
            await self._channel.aclose()
        if self._http_client is not None:
            await self._http_client.aclose()

        self._cached = None
        self._fallback = None
        self._channel = None
        self._http_client = None


_default_resolver: Optional[BridgeResolver] = None


def default_resolver() -> BridgeResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = BridgeResolver()
    return _default_resolver


def get_api() -> Optional[BridgeSurface]:
    return default_resolver().get_api()


def require_api() -> BridgeSurface:
    return default_resolver().require_api()


async def wait_for_api(timeout_ms: Optional[int] = None, poll_interval_ms: Optional[int] = None) -> BridgeSurface:
    return await default_resolver().wait_for_api(timeout_ms, poll_interval_ms)
