# bridge/bridge_interface.py
"""
IBridgeAdapter Protocol
=======================
Capability contract for a lighting bridge.

The dispatcher is written only against these four operations. Both protocol
generations implement them; anything generation-specific stays inside the
adapter.
"""

from __future__ import annotations
from typing import Protocol

from models.domain.light import GroupLightState, GroupLightUpdate


class IBridgeAdapter(Protocol):
    """
    Minimal bridge contract.

    - get_group_state: read power + brightness (0-254) of the target group
    - set_group_state: write power and, optionally, brightness
    - recall_scene: activate a stored scene
    - set_dynamics: toggle automatic motion for a scene

    All operations raise BridgeError subclasses, never transport exceptions.
    Brightness 0 on write is treated as "no brightness change" because 0 is
    also the unspecified value on the wire.
    """

    async def get_group_state(self) -> GroupLightState:
        """Raises BridgeUnreachableError, BridgeNotConfiguredError."""
        ...

    async def set_group_state(self, update: GroupLightUpdate) -> None:
        """Raises BridgeUnreachableError, BridgeNotConfiguredError."""
        ...

    async def recall_scene(self, scene_id: str) -> None:
        """Raises BridgeUnreachableError, BridgeNotFoundError."""
        ...

    async def set_dynamics(self, scene_id: str, enabled: bool) -> None:
        """Raises BridgeUnreachableError, BridgeNotFoundError, BridgeUnsupportedError."""
        ...

    async def check_connection(self) -> None:
        """Startup reachability/credential check. Raises BridgeError."""
        ...

    async def close(self) -> None:
        """Release the underlying HTTP client."""
        ...
