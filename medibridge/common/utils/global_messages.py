class GlobalMessages:
    # Database Messages
    DATABASE_NOT_INITIALIZED = "Database has not been initialized."
    TRANSACTION_IN_PROGRESS = "A transaction is already in progress on this connection."

    # Bridge Messages
    BRIDGE_UNAVAILABLE = "The MediBridge backend bridge is unavailable. Please relaunch the MediBridge app from its desktop shortcut."
    BRIDGE_TIMEOUT = "Timed out waiting for the MediBridge bridge response."
    BRIDGE_CALL_FAILED = "Bridge call failed."
    BRIDGE_NOT_READY = "The MediBridge bridge is not ready yet."
    BRIDGE_ROOT_NOT_CALLABLE = "Cannot invoke the bridge root directly."

    # Operation Messages
    UNKNOWN_OPERATION = "Unknown bridge operation: {name}"
    UNKNOWN_BRIDGE_PATH = "Unknown bridge path: {path}"
    BRIDGE_TARGET_NOT_CALLABLE = "Bridge target at {path} is not callable."
    PAYLOAD_REQUIRED = "Operation {name} requires a payload."
