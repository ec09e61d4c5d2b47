"""
ResourceGraphBridge - v2 (CLIP v2) bridge adapter

Resources live under https://<host>/clip/v2/resource/<type>/<uuid> and every
response is an envelope {"errors": [...], "data": [...]}. Brightness is a
percentage on this API and is converted to the native 0-254 scale here.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from bridge.errors import BridgeNotConfiguredError, BridgeUnreachableError
from bridge.http_bridge import DEFAULT_REQUEST_TIMEOUT, HttpBridgeAdapter
from models.domain.light import (
    GroupLightState,
    GroupLightUpdate,
    clamp_brightness,
    native_to_percent,
    percent_to_native,
)
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BRIDGE)

APPLICATION_KEY_HEADER = "hue-application-key"


class ResourceGraphBridge(HttpBridgeAdapter):
    """
    v2 adapter.

    The grouped_light id comes from the constructor and may be None. A
    missing id only fails when a group operation runs; scenes still work.
    """

    def __init__(
        self,
        host: str,
        application_key: str,
        group_id: Optional[str] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        verify: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        super().__init__(
            base_url=f"https://{host}/clip/v2/",
            headers={APPLICATION_KEY_HEADER: application_key},
            timeout=timeout,
            verify=verify,
            transport=transport,
        )
        self.group_id = group_id or None

    def _require_group(self, operation: str) -> str:
        if not self.group_id:
            raise BridgeNotConfiguredError(operation)
        return self.group_id

    async def _call(self, operation: str, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> list:
        body = await self._request(operation, method, f"resource/{path}", payload)
        if not isinstance(body, dict):
            raise BridgeUnreachableError(operation, "response is not a v2 envelope")

        errors = body.get("errors") or []
        if errors:
            if not isinstance(errors, list):
                errors = [errors]
            description = "; ".join(
                str(e.get("description", e)) if isinstance(e, dict) else str(e)
                for e in errors if e
            )
            raise BridgeUnreachableError(operation, description or "bridge reported errors")

        data = body.get("data")
        if not isinstance(data, list):
            raise BridgeUnreachableError(operation, "response has no data list")
        return data

    async def check_connection(self) -> None:
        data = await self._call("check_connection", "GET", "bridge")
        if not data or not isinstance(data[0], dict):
            raise BridgeUnreachableError("check_connection", "response has no bridge resource")
        bridge_id = data[0].get("bridge_id")
        log.info("Bridge reachable (v2)", url=self.base_url, bridge_id=bridge_id)

    async def get_group_state(self) -> GroupLightState:
        group_id = self._require_group("get_group_state")
        data = await self._call("get_group_state", "GET", f"grouped_light/{group_id}")

        try:
            resource = data[0]
            on = bool(resource["on"]["on"])
            # Groups without dimmable lights have no dimming block
            percent = float((resource.get("dimming") or {}).get("brightness", 0.0))
        except (AttributeError, IndexError, KeyError, TypeError, ValueError) as e:
            raise BridgeUnreachableError("get_group_state", f"malformed grouped_light payload: {e}") from e

        return GroupLightState(on=on, brightness=percent_to_native(percent))

    async def set_group_state(self, update: GroupLightUpdate) -> None:
        group_id = self._require_group("set_group_state")
        payload: Dict[str, Any] = {"on": {"on": update.on}}
        if update.changes_brightness:
            payload["dimming"] = {"brightness": native_to_percent(clamp_brightness(update.brightness))}

        await self._call("set_group_state", "PUT", f"grouped_light/{group_id}", payload)

    async def recall_scene(self, scene_id: str) -> None:
        await self._call("recall_scene", "PUT", f"scene/{scene_id}", {"recall": {"action": "active"}})

    async def set_dynamics(self, scene_id: str, enabled: bool) -> None:
        await self._call("set_dynamics", "PUT", f"scene/{scene_id}", {"auto_dynamic": enabled})
