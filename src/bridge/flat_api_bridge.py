"""
FlatApiBridge - v1 bridge adapter

Groups are addressed by small integer ids under /api/<username>/.
The bridge answers HTTP 200 even for failures and reports them as a list of
{"error": {"type": N, "address": ..., "description": ...}} objects.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from bridge.errors import (
    BridgeNotConfiguredError,
    BridgeNotFoundError,
    BridgeUnreachableError,
    BridgeUnsupportedError,
)
from bridge.http_bridge import DEFAULT_REQUEST_TIMEOUT, HttpBridgeAdapter
from models.domain.light import GroupLightState, GroupLightUpdate, clamp_brightness
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BRIDGE)

# v1 error type for "resource, <address>, not available"
ERROR_RESOURCE_NOT_AVAILABLE = 3

# Group 0 contains every light known to the bridge
ALL_LIGHTS_GROUP = 0


class FlatApiBridge(HttpBridgeAdapter):
    """v1 adapter. Dynamics is not part of this API and reports Unsupported."""

    def __init__(
        self,
        host: str,
        username: str,
        group_id: Optional[int],
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=f"http://{host}/api/{username}/",
            timeout=timeout,
            transport=transport,
        )
        self.group_id = group_id

    def _require_group(self, operation: str) -> int:
        if self.group_id is None:
            raise BridgeNotConfiguredError(operation)
        return self.group_id

    def _raise_for_api_errors(self, operation: str, body: Any) -> None:
        if not isinstance(body, list):
            return
        for entry in body:
            if not isinstance(entry, dict):
                raise BridgeUnreachableError(operation, f"unexpected response entry: {entry!r}")
            if "error" not in entry:
                continue
            error = entry["error"]
            if not isinstance(error, dict):
                raise BridgeUnreachableError(operation, str(error) or "unknown bridge error")
            details = {"type": error.get("type"), "address": error.get("address")}
            description = error.get("description", "unknown bridge error")
            if error.get("type") == ERROR_RESOURCE_NOT_AVAILABLE:
                raise BridgeNotFoundError(operation, description, details=details)
            raise BridgeUnreachableError(operation, description, details=details)

    async def check_connection(self) -> None:
        body = await self._request("check_connection", "GET", "lights")
        self._raise_for_api_errors("check_connection", body)
        if not isinstance(body, dict):
            raise BridgeUnreachableError("check_connection", "unexpected lights payload")
        log.info("Bridge reachable (v1)", url=self.base_url, lights=len(body))

    async def get_group_state(self) -> GroupLightState:
        group_id = self._require_group("get_group_state")
        body = await self._request("get_group_state", "GET", f"groups/{group_id}")
        self._raise_for_api_errors("get_group_state", body)

        try:
            action = body["action"]
            on = bool(action["on"])
            bri = int(action.get("bri", 0))
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise BridgeUnreachableError("get_group_state", f"malformed group payload: {e}") from e

        return GroupLightState(on=on, brightness=clamp_brightness(bri))

    async def set_group_state(self, update: GroupLightUpdate) -> None:
        group_id = self._require_group("set_group_state")
        payload: Dict[str, Any] = {"on": update.on}
        if update.changes_brightness:
            payload["bri"] = clamp_brightness(update.brightness)

        body = await self._request("set_group_state", "PUT", f"groups/{group_id}/action", payload)
        self._raise_for_api_errors("set_group_state", body)

    async def recall_scene(self, scene_id: str) -> None:
        body = await self._request(
            "recall_scene", "PUT", f"groups/{ALL_LIGHTS_GROUP}/action", {"scene": scene_id}
        )
        self._raise_for_api_errors("recall_scene", body)

    async def set_dynamics(self, scene_id: str, enabled: bool) -> None:
        raise BridgeUnsupportedError(
            "set_dynamics", "scene dynamics requires the v2 API", details={"scene": scene_id}
        )
