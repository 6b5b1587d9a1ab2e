# medibridge/client/errors.py

from typing import Optional

from medibridge.common.utils.global_messages import GlobalMessages


class BridgeUnavailableError(RuntimeError):
    """No bridge could be resolved, or the channel to it went away."""

    def __init__(self, message: str = GlobalMessages.BRIDGE_UNAVAILABLE):
        super().__init__(message)


class BridgeCallError(RuntimeError):
    """The backend ran the call and reported a failure."""

    def __init__(self, message: str = GlobalMessages.BRIDGE_CALL_FAILED, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
