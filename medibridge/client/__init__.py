from .errors import BridgeCallError, BridgeUnavailableError
from .fallback_bridge import FallbackBridge, WebSocketChannel
from .http_bridge import HttpBridge
from .resolver import BridgeResolver, get_api, require_api, wait_for_api
