from .api import BRIDGE_READY, BridgeApi, build_bridge_api, expose_bridge, get_exposed_api, withdraw_bridge
from .protocol import OPERATION_SPECS, BridgePathError, BridgeSurface
from .registry import REGISTRY, UnknownOperationError, invoke
