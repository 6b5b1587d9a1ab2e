# medibridge/client/http_bridge.py
"""Primary client transport: each operation is one HTTP request."""

import logging
from typing import Any

import httpx

from medibridge.bridge.protocol import BridgeCallable, BridgeSurface, OperationSpec, to_wire
from .errors import BridgeCallError, BridgeUnavailableError

logger = logging.getLogger(__name__)

READY_PATH = "/bridge/ready"


def _error_detail(response: httpx.Response) -> str:
    try:
        detail = response.json().get("detail")
    except (ValueError, AttributeError):
        detail = None
    if isinstance(detail, str) and detail:
        return detail
    if detail:
        return str(detail)
    return f"Bridge request failed with status {response.status_code}"


async def probe_ready(client: httpx.AsyncClient, timeout: float = 1.0) -> bool:
    """True when the backend answers the readiness route with 200."""
    try:
        response = await client.get(READY_PATH, timeout=timeout)
    except httpx.HTTPError:
        return False
    return response.status_code == 200


class HttpBridge(BridgeSurface):
    """``api.<namespace>.<action>(payload)`` mapped onto the backend's routes."""

    def __init__(self, client: httpx.AsyncClient):
        self._client = client
        super().__init__(self._caller)

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client

    def _caller(self, spec: OperationSpec) -> BridgeCallable:
        async def call(payload=None):
            return await self._request(spec, payload)

        call.__name__ = spec.attribute[1]
        return call

    async def _request(self, spec: OperationSpec, payload: Any) -> Any:
        body = to_wire(payload) if spec.takes_payload else None

        try:
            response = await self._client.request(spec.method, spec.path, json=body)
        except httpx.TransportError as e:
            logger.error(f"HTTP bridge call {spec.name} failed: {e}")
            raise BridgeUnavailableError() from e

        if response.is_error:
            raise BridgeCallError(_error_detail(response), status_code=response.status_code)

        return response.json()

    async def aclose(self) -> None:
        await self._client.aclose()
