"""
Bridge subsystem
----------------

Capability adapters for the two bridge protocol generations.

External code should import from:
    from bridge import IBridgeAdapter, create_bridge, BridgeError
"""

from .bridge_interface import IBridgeAdapter
from .errors import (
    BridgeError,
    BridgeUnreachableError,
    BridgeNotFoundError,
    BridgeNotConfiguredError,
    BridgeUnsupportedError,
)
from .factory import create_bridge

__all__ = [
    "IBridgeAdapter",
    "BridgeError",
    "BridgeUnreachableError",
    "BridgeNotFoundError",
    "BridgeNotConfiguredError",
    "BridgeUnsupportedError",
    "create_bridge",
]
