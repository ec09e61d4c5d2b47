"""
Unit tests for ActionDispatcher

Covers the five actions, brightness clamping, scene rotation and the
failure containment rules (no write after a failed read, no rollback of
optimistic state).
"""

import pytest

from bridge.errors import (
    BridgeNotConfiguredError,
    BridgeNotFoundError,
    BridgeUnreachableError,
    BridgeUnsupportedError,
)
from controllers.action_dispatcher import ActionDispatcher
from models.domain.interaction import InteractionState
from models.domain.light import GroupLightState, GroupLightUpdate
from models.enums import LightAction


# ============================================================================
# Power
# ============================================================================

class TestTogglePower:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("initially_on", [True, False])
    async def test_writes_negated_power(self, dispatcher, bridge, initially_on):
        bridge.get_group_state.return_value = GroupLightState(on=initially_on, brightness=140)

        await dispatcher.toggle_power()

        bridge.get_group_state.assert_awaited_once()
        bridge.set_group_state.assert_awaited_once_with(GroupLightUpdate(on=not initially_on))

    @pytest.mark.asyncio
    async def test_leaves_brightness_unchanged(self, dispatcher, bridge):
        await dispatcher.toggle_power()

        update = bridge.set_group_state.await_args.args[0]
        assert update.brightness is None
        assert not update.changes_brightness

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        BridgeUnreachableError("get_group_state", "timed out"),
        BridgeNotConfiguredError("get_group_state"),
    ])
    async def test_read_failure_skips_write(self, dispatcher, bridge, error):
        bridge.get_group_state.side_effect = error

        await dispatcher.toggle_power()

        bridge.set_group_state.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_write_failure_is_contained(self, dispatcher, bridge):
        bridge.set_group_state.side_effect = BridgeUnreachableError("set_group_state", "refused")

        await dispatcher.toggle_power()  # must not raise

        bridge.set_group_state.assert_awaited_once()


# ============================================================================
# Brightness
# ============================================================================

class TestBrightness:

    @pytest.mark.asyncio
    @pytest.mark.parametrize("initial, action, expected", [
        (100, LightAction.BRIGHTEN, 125),
        (100, LightAction.DIM, 75),
        (240, LightAction.BRIGHTEN, 254),
        (10, LightAction.DIM, 0),
        (254, LightAction.BRIGHTEN, 254),
        (0, LightAction.DIM, 0),
    ])
    async def test_clamped_write_turns_group_on(self, dispatcher, bridge, initial, action, expected):
        bridge.get_group_state.return_value = GroupLightState(on=False, brightness=initial)

        await dispatcher.dispatch(action)

        bridge.set_group_state.assert_awaited_once_with(GroupLightUpdate(on=True, brightness=expected))

    @pytest.mark.asyncio
    async def test_custom_step(self, bridge):
        dispatcher = ActionDispatcher(bridge, InteractionState(), brightness_step=10)
        bridge.get_group_state.return_value = GroupLightState(on=True, brightness=50)

        await dispatcher.brighten()

        bridge.set_group_state.assert_awaited_once_with(GroupLightUpdate(on=True, brightness=60))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", [LightAction.DIM, LightAction.BRIGHTEN])
    async def test_read_failure_skips_write(self, dispatcher, bridge, action):
        bridge.get_group_state.side_effect = BridgeUnreachableError("get_group_state", "timed out")

        await dispatcher.dispatch(action)

        bridge.set_group_state.assert_not_awaited()


# ============================================================================
# Scenes
# ============================================================================

class TestNextScene:

    @pytest.mark.asyncio
    async def test_three_rotations_wrap_to_start(self, dispatcher, bridge):
        for _ in range(3):
            await dispatcher.dispatch(LightAction.NEXT_SCENE)

        recalled = [call.args[0] for call in bridge.recall_scene.await_args_list]
        assert recalled == ["s2", "s3", "s1"]
        assert dispatcher.state.scene_index == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("count, length", [(1, 1), (4, 3), (7, 5), (10, 2)])
    async def test_index_after_k_rotations(self, bridge, count, length):
        scenes = tuple(f"scene{i}" for i in range(length))
        dispatcher = ActionDispatcher(bridge, InteractionState(scenes=scenes))

        for _ in range(count):
            await dispatcher.next_scene()

        assert dispatcher.state.scene_index == count % length

    @pytest.mark.asyncio
    async def test_empty_scene_list_is_noop(self, bridge):
        dispatcher = ActionDispatcher(bridge, InteractionState())

        await dispatcher.next_scene()

        bridge.recall_scene.assert_not_awaited()
        assert dispatcher.state.scene_index == 0

    @pytest.mark.asyncio
    async def test_recall_failure_keeps_advanced_index(self, dispatcher, bridge):
        bridge.recall_scene.side_effect = BridgeNotFoundError("recall_scene", "no such scene")

        await dispatcher.next_scene()

        assert dispatcher.state.scene_index == 1
        assert dispatcher.state.current_scene == "s2"


class TestToggleDynamics:

    @pytest.mark.asyncio
    async def test_empty_scene_list_is_noop(self, bridge):
        dispatcher = ActionDispatcher(bridge, InteractionState())

        await dispatcher.toggle_dynamics()

        bridge.set_dynamics.assert_not_awaited()
        assert dispatcher.state.dynamics_enabled is True

    @pytest.mark.asyncio
    async def test_flips_flag_for_current_scene(self, dispatcher, bridge):
        await dispatcher.toggle_dynamics()

        bridge.set_dynamics.assert_awaited_once_with("s1", False)
        assert dispatcher.state.dynamics_enabled is False

    @pytest.mark.asyncio
    async def test_follows_scene_index(self, dispatcher, bridge):
        await dispatcher.next_scene()
        await dispatcher.toggle_dynamics()
        await dispatcher.toggle_dynamics()

        assert [c.args for c in bridge.set_dynamics.await_args_list] == [("s2", False), ("s2", True)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        BridgeUnsupportedError("set_dynamics", "v1"),
        BridgeUnreachableError("set_dynamics", "timed out"),
    ])
    async def test_failure_keeps_flipped_flag(self, dispatcher, bridge, error):
        bridge.set_dynamics.side_effect = error

        await dispatcher.toggle_dynamics()

        assert dispatcher.state.dynamics_enabled is False


# ============================================================================
# Dispatch table
# ============================================================================

@pytest.mark.asyncio
async def test_every_action_has_a_handler(dispatcher):
    for action in LightAction:
        await dispatcher.dispatch(action)


@pytest.mark.asyncio
async def test_scene_actions_never_touch_group_state(dispatcher, bridge):
    await dispatcher.dispatch(LightAction.NEXT_SCENE)
    await dispatcher.dispatch(LightAction.TOGGLE_DYNAMICS)

    bridge.get_group_state.assert_not_awaited()
    bridge.set_group_state.assert_not_awaited()
