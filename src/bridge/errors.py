"""
Bridge error taxonomy

Every adapter failure surfaces as a BridgeError subclass so callers can
contain errors per action without knowing which protocol generation is active.
"""

from typing import Optional


class BridgeError(Exception):
    """Base class for bridge adapter errors"""
    code = "BRIDGE_ERROR"

    def __init__(self, operation: str, message: str, details: Optional[dict] = None):
        self.operation = operation
        self.message = message
        self.details = details or {}
        super().__init__(f"{operation}: {message}")


class BridgeUnreachableError(BridgeError):
    """Transport failure: timeout, refused connection, bad status or malformed body"""
    code = "UNREACHABLE"


class BridgeNotFoundError(BridgeError):
    """Bridge reports that the scene or resource id does not exist"""
    code = "NOT_FOUND"


class BridgeNotConfiguredError(BridgeError):
    """No target group has been bound for group operations"""
    code = "NOT_CONFIGURED"

    def __init__(self, operation: str):
        super().__init__(operation, "target light group id is not set")


class BridgeUnsupportedError(BridgeError):
    """Capability not offered by the active protocol generation"""
    code = "UNSUPPORTED"
