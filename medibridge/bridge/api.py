# medibridge/bridge/api.py
"""
The primary bridge: an in-process capability object exposing every
operation, installed on the application once the database is ready.
"""

import logging
import threading
from typing import Callable, List, Optional

from fastapi import FastAPI, HTTPException, Request

from medibridge.common.database.database import DatabaseManager
from medibridge.common.utils.global_messages import GlobalMessages
from . import registry
from .protocol import BridgeCallable, BridgeSurface, OperationSpec

logger = logging.getLogger(__name__)


class ReadySignal:
    """One-shot readiness notification.

    Listeners added before ``fire()`` run once when it fires; listeners added
    afterwards run immediately.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._fired = False
        self._listeners: List[Callable[[], None]] = []

    @property
    def is_set(self) -> bool:
        return self._fired

    def add_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            if not self._fired:
                self._listeners.append(listener)
                return
        listener()

    def remove_listener(self, listener: Callable[[], None]) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def fire(self) -> None:
        with self._lock:
            if self._fired:
                return
            self._fired = True
            listeners, self._listeners = self._listeners, []

        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"Bridge-ready listener failed: {e}")


BRIDGE_READY = ReadySignal()

_exposed_api: Optional["BridgeApi"] = None


class BridgeApi(BridgeSurface):
    """Forwards ``api.<namespace>.<action>(payload)`` to the registered handler."""

    def __init__(self, database: DatabaseManager):
        self._database = database
        super().__init__(self._forwarder)

    @property
    def database(self) -> DatabaseManager:
        return self._database

    def _forwarder(self, spec: OperationSpec) -> BridgeCallable:
        database = self._database

        async def forward(payload=None):
            return registry.invoke(spec.name, database.connection, payload)

        forward.__name__ = spec.attribute[1]
        forward.__qualname__ = f"BridgeApi.{'.'.join(spec.attribute)}"
        return forward


def build_bridge_api(database: DatabaseManager) -> BridgeApi:
    return BridgeApi(database)


def expose_bridge(app: FastAPI, database: DatabaseManager) -> BridgeApi:
    """Install the capability object on ``app`` and announce readiness."""
    global _exposed_api

    api = build_bridge_api(database)
    app.state.api = api
    app.state.bridge_ready = True
    _exposed_api = api

    logger.info(f"Bridge exposed with {len(registry.REGISTRY)} operations")
    BRIDGE_READY.fire()
    return api


def withdraw_bridge(app: FastAPI) -> None:
    global _exposed_api

    api = getattr(app.state, "api", None)
    if api is not None and api is _exposed_api:
        _exposed_api = None

    app.state.api = None
    app.state.bridge_ready = False
    logger.info("Bridge withdrawn")


def get_exposed_api() -> Optional[BridgeApi]:
    """The in-process bridge, when this process is serving one."""
    return _exposed_api


def get_bridge_api(request: Request) -> BridgeApi:
    api = getattr(request.app.state, "api", None)
    if api is None:
        raise HTTPException(status_code=503, detail=GlobalMessages.BRIDGE_NOT_READY)
    return api
