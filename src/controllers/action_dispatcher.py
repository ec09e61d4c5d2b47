"""ActionDispatcher - turns LightActions into bridge calls"""

from __future__ import annotations

from typing import Awaitable, Callable, Dict, Optional

from bridge.bridge_interface import IBridgeAdapter
from bridge.errors import BridgeError, BridgeUnsupportedError
from models.domain.interaction import InteractionState
from models.domain.light import GroupLightState, GroupLightUpdate, clamp_brightness
from models.config import DEFAULT_BRIGHTNESS_STEP
from models.enums import LightAction
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.ACTION)


class ActionDispatcher:
    """
    Executes one action at a time against the bridge.

    Responsibilities:
    - Own the InteractionState (scene index, dynamics flag)
    - Read fresh group state before power/brightness changes
    - Contain every BridgeError: log it and return, never raise

    Scene index and dynamics flag are changed before the bridge call and are
    not restored when that call fails.
    """

    def __init__(
        self,
        bridge: IBridgeAdapter,
        state: Optional[InteractionState] = None,
        brightness_step: int = DEFAULT_BRIGHTNESS_STEP,
    ):
        self.bridge = bridge
        self.state = state or InteractionState()
        self.brightness_step = brightness_step

        self._handlers: Dict[LightAction, Callable[[], Awaitable[None]]] = {
            LightAction.TOGGLE_POWER: self.toggle_power,
            LightAction.DIM: self.dim,
            LightAction.BRIGHTEN: self.brighten,
            LightAction.NEXT_SCENE: self.next_scene,
            LightAction.TOGGLE_DYNAMICS: self.toggle_dynamics,
        }

    async def dispatch(self, action: LightAction) -> None:
        log.debug("Dispatching action", action=action.name)
        await self._handlers[action]()

    # ===== Power / brightness =====

    async def _read_group_state(self, action: str) -> Optional[GroupLightState]:
        try:
            return await self.bridge.get_group_state()
        except BridgeError as e:
            log.error("Error getting group state", action=action, error=e.code, cause=str(e))
            return None

    async def _write_group_state(self, action: str, update: GroupLightUpdate) -> None:
        try:
            await self.bridge.set_group_state(update)
        except BridgeError as e:
            log.error("Error setting group state", action=action, error=e.code, cause=str(e))

    async def toggle_power(self) -> None:
        current = await self._read_group_state("toggle_power")
        if current is None:
            return

        log.info("Turning group " + ("off" if current.on else "on"))
        await self._write_group_state("toggle_power", GroupLightUpdate(on=not current.on))

    async def dim(self) -> None:
        await self.adjust_brightness(-self.brightness_step)

    async def brighten(self) -> None:
        await self.adjust_brightness(self.brightness_step)

    async def adjust_brightness(self, delta: int) -> None:
        action = "brighten" if delta > 0 else "dim"
        current = await self._read_group_state(action)
        if current is None:
            return

        target = clamp_brightness(current.brightness + delta)
        log.info("Adjusting brightness", **{"from": current.brightness, "to": target})
        await self._write_group_state(action, GroupLightUpdate(on=True, brightness=target))

    # ===== Scenes =====

    async def next_scene(self) -> None:
        if not self.state.has_scenes:
            log.info("No scenes configured")
            return

        scene_id = self.state.advance_scene()
        log.info("Activating scene", scene=scene_id, index=self.state.scene_index)
        try:
            await self.bridge.recall_scene(scene_id)
        except BridgeError as e:
            log.error("Error activating scene", scene=scene_id, error=e.code, cause=str(e))

    async def toggle_dynamics(self) -> None:
        if not self.state.has_scenes:
            log.info("No scenes configured, dynamics unchanged")
            return

        enabled = self.state.toggle_dynamics()
        scene_id = self.state.current_scene
        log.info("Setting scene dynamics", scene=scene_id, enabled=enabled)
        try:
            await self.bridge.set_dynamics(scene_id, enabled)
        except BridgeUnsupportedError as e:
            log.warn("Scene dynamics not supported by this bridge", scene=scene_id, cause=str(e))
        except BridgeError as e:
            log.error("Error setting scene dynamics", scene=scene_id, error=e.code, cause=str(e))
