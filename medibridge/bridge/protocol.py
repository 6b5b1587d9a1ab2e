# medibridge/bridge/protocol.py
"""
Bridge protocol shared by the backend and its clients.

Holds the enumerated operation catalog (wire name, HTTP route), the message
envelopes used by the fallback channel, and ``BridgeSurface``: the
namespaced, read-only callable object every transport exposes, so callers
write ``api.patients.add(payload)`` whichever transport resolved.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Awaitable, Callable, Dict, List, Literal, Mapping, Optional, Sequence, Tuple

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_snake

from medibridge.common.schemas import BridgeModel
from medibridge.common.utils.global_messages import GlobalMessages

BRIDGE_SOURCE = "mediBridge"
CALL_TYPE = "bridge-call"
RESPONSE_TYPE = "bridge-response"
WILDCARD_ORIGIN = "*"

BridgeCallable = Callable[..., Awaitable[Any]]


# ============================================================================
# OPERATION CATALOG
# ============================================================================

@dataclass(frozen=True)
class OperationSpec:
    """One bridge operation: its wire name and its HTTP route."""
    name: str
    method: str
    path: str
    takes_payload: bool = False

    @property
    def segments(self) -> Tuple[str, str]:
        namespace, action = self.name.split(".")
        return namespace, action

    @property
    def attribute(self) -> Tuple[str, str]:
        """Python attribute names, e.g. ``medicalCertificates.add`` -> ``medical_certificates.add``."""
        namespace, action = self.segments
        return to_snake(namespace), to_snake(action)


OPERATION_SPECS: Tuple[OperationSpec, ...] = (
    OperationSpec("setup.isComplete", "GET", "/setup/is-complete"),
    OperationSpec("setup.getProfile", "GET", "/setup/profile"),
    OperationSpec("setup.completeSetup", "POST", "/setup/complete", takes_payload=True),
    OperationSpec("modules.getModules", "GET", "/modules"),
    OperationSpec("modules.updateModules", "PUT", "/modules", takes_payload=True),
    OperationSpec("patients.list", "GET", "/patients"),
    OperationSpec("patients.add", "POST", "/patients", takes_payload=True),
    OperationSpec("appointments.list", "GET", "/appointments"),
    OperationSpec("appointments.add", "POST", "/appointments", takes_payload=True),
    OperationSpec("prescriptions.list", "GET", "/prescriptions"),
    OperationSpec("prescriptions.add", "POST", "/prescriptions", takes_payload=True),
    OperationSpec("billing.list", "GET", "/billing"),
    OperationSpec("billing.recordPayment", "POST", "/billing/payments", takes_payload=True),
    OperationSpec("inventory.list", "GET", "/inventory"),
    OperationSpec("inventory.upsert", "PUT", "/inventory", takes_payload=True),
    OperationSpec("analytics.overview", "GET", "/analytics/overview"),
    OperationSpec("collaboration.list", "GET", "/collaboration"),
    OperationSpec("collaboration.add", "POST", "/collaboration", takes_payload=True),
    OperationSpec("medicalCertificates.list", "GET", "/medical-certificates"),
    OperationSpec("medicalCertificates.add", "POST", "/medical-certificates", takes_payload=True),
)

NAMESPACES = frozenset(spec.segments[0] for spec in OPERATION_SPECS)


def to_wire(payload: Any) -> Any:
    """Payloads cross the bridge as plain JSON data with camelCase keys."""
    if isinstance(payload, BaseModel):
        return payload.model_dump(by_alias=True, mode="json")
    return payload


# ============================================================================
# FALLBACK MESSAGE ENVELOPES
# ============================================================================

class BridgeCall(BridgeModel):
    """A call sent over the message channel."""
    source: Literal["mediBridge"] = BRIDGE_SOURCE
    type: Literal["bridge-call"] = CALL_TYPE
    request_id: str
    path: List[str]
    args: List[Any] = Field(default_factory=list)


class BridgeResponse(BridgeModel):
    """The reply to a ``BridgeCall``, tagged with the same request id."""
    source: Literal["mediBridge"] = BRIDGE_SOURCE
    type: Literal["bridge-response"] = RESPONSE_TYPE
    request_id: str
    success: bool
    result: Any = None
    error: Optional[str] = None
    target_origin: str = WILDCARD_ORIGIN


# ============================================================================
# CAPABILITY SURFACE
# ============================================================================

class BridgePathError(LookupError):
    """A bridge path that does not name a callable operation."""


class BridgeNamespace:
    """Read-only group of bridge actions, e.g. ``api.patients``."""

    def __init__(self, name: str, actions: Mapping[str, BridgeCallable]):
        object.__setattr__(self, "_name", name)
        object.__setattr__(self, "_actions", MappingProxyType(dict(actions)))

    @property
    def actions(self) -> Mapping[str, BridgeCallable]:
        return self._actions

    def __getattr__(self, attribute: str) -> BridgeCallable:
        if attribute.startswith("_"):
            raise AttributeError(attribute)
        try:
            return self._actions[attribute]
        except KeyError:
            raise AttributeError(f"Bridge namespace '{self._name}' has no action '{attribute}'") from None

    def __setattr__(self, attribute: str, value: Any) -> None:
        raise AttributeError("Bridge namespaces are read-only")

    def __delattr__(self, attribute: str) -> None:
        raise AttributeError("Bridge namespaces are read-only")

    def __dir__(self):
        return sorted(self._actions)

    def __repr__(self):
        return f"<BridgeNamespace {self._name}: {', '.join(sorted(self._actions))}>"


class BridgeSurface:
    """Every catalog operation as ``surface.<namespace>.<action>(payload=None)``.

    ``factory`` builds the callable for one ``OperationSpec``; transports
    differ only in the factory they pass. The surface is frozen once built.
    """

    def __init__(self, factory: Callable[[OperationSpec], BridgeCallable]):
        grouped: Dict[str, Dict[str, BridgeCallable]] = {}
        by_name: Dict[str, BridgeCallable] = {}

        for spec in OPERATION_SPECS:
            function = factory(spec)
            namespace, action = spec.attribute
            grouped.setdefault(namespace, {})[action] = function
            by_name[spec.name] = function

        object.__setattr__(self, "_namespaces", MappingProxyType({
            name: BridgeNamespace(name, actions) for name, actions in grouped.items()
        }))
        object.__setattr__(self, "_by_name", MappingProxyType(by_name))
        object.__setattr__(self, "_frozen", True)

    @property
    def namespaces(self) -> Mapping[str, BridgeNamespace]:
        return self._namespaces

    def __getattr__(self, attribute: str) -> BridgeNamespace:
        if attribute.startswith("_"):
            raise AttributeError(attribute)
        try:
            return self._namespaces[attribute]
        except KeyError:
            raise AttributeError(f"Bridge has no namespace '{attribute}'") from None

    def __setattr__(self, attribute: str, value: Any) -> None:
        if getattr(self, "_frozen", False):
            raise AttributeError("The bridge surface is read-only")
        object.__setattr__(self, attribute, value)

    def operation(self, name: str) -> BridgeCallable:
        """Look up a callable by wire name, e.g. ``"billing.recordPayment"``."""
        try:
            return self._by_name[name]
        except KeyError:
            raise BridgePathError(GlobalMessages.UNKNOWN_BRIDGE_PATH.format(path=name)) from None

    def resolve(self, path: Sequence[str]) -> BridgeCallable:
        """Resolve a wire path such as ``["patients", "list"]`` to its callable."""
        dotted = ".".join(path)
        if dotted in self._by_name:
            return self._by_name[dotted]
        if not path:
            raise BridgePathError(GlobalMessages.BRIDGE_TARGET_NOT_CALLABLE.format(path="<root>"))
        if len(path) == 1 and path[0] in NAMESPACES:
            raise BridgePathError(GlobalMessages.BRIDGE_TARGET_NOT_CALLABLE.format(path=dotted))
        raise BridgePathError(GlobalMessages.UNKNOWN_BRIDGE_PATH.format(path=dotted))
