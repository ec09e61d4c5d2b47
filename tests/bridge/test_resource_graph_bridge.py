"""
Wire-level tests for the v2 ResourceGraphBridge using httpx.MockTransport
"""

import json

import httpx
import pytest

from bridge.errors import BridgeNotConfiguredError, BridgeNotFoundError, BridgeUnreachableError
from bridge.resource_graph_bridge import APPLICATION_KEY_HEADER, ResourceGraphBridge
from models.domain.light import GroupLightState, GroupLightUpdate

GROUP = "1b6f0f6c-0a3e-4b5e-9a8e-2f1c7d3e5a10"


def envelope(*data, errors=()):
    return {"errors": list(errors), "data": list(data)}


def make_bridge(responder, group_id=GROUP):
    requests = []

    def handler(request):
        requests.append(request)
        return responder(request)

    bridge = ResourceGraphBridge(
        host="10.0.0.2",
        application_key="app-key",
        group_id=group_id,
        transport=httpx.MockTransport(handler),
    )
    return bridge, requests


def ok(body):
    return lambda request: httpx.Response(200, json=body)


# ============================================================================
# Group state
# ============================================================================

@pytest.mark.asyncio
async def test_get_group_state_converts_percent_to_native():
    body = envelope({"id": GROUP, "on": {"on": True}, "dimming": {"brightness": 50.0}})
    bridge, requests = make_bridge(ok(body))

    state = await bridge.get_group_state()

    assert state == GroupLightState(on=True, brightness=127)
    assert requests[0].url == f"https://10.0.0.2/clip/v2/resource/grouped_light/{GROUP}"
    assert requests[0].headers[APPLICATION_KEY_HEADER] == "app-key"


@pytest.mark.asyncio
@pytest.mark.parametrize("percent, native", [(0.0, 0), (100.0, 254), (39.37, 100), (99.9, 254)])
async def test_percent_rounding(percent, native):
    body = envelope({"on": {"on": False}, "dimming": {"brightness": percent}})
    bridge, _ = make_bridge(ok(body))

    assert (await bridge.get_group_state()).brightness == native


@pytest.mark.asyncio
async def test_group_without_dimming_reads_zero():
    bridge, _ = make_bridge(ok(envelope({"on": {"on": True}})))

    assert await bridge.get_group_state() == GroupLightState(on=True, brightness=0)


@pytest.mark.asyncio
async def test_set_group_state_sends_percent():
    bridge, requests = make_bridge(ok(envelope({"rid": GROUP, "rtype": "grouped_light"})))

    await bridge.set_group_state(GroupLightUpdate(on=True, brightness=127))

    assert requests[0].method == "PUT"
    payload = json.loads(requests[0].content)
    assert payload["on"] == {"on": True}
    assert payload["dimming"]["brightness"] == pytest.approx(50.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("brightness", [None, 0])
async def test_set_group_state_without_brightness_omits_dimming(brightness):
    bridge, requests = make_bridge(ok(envelope()))

    await bridge.set_group_state(GroupLightUpdate(on=False, brightness=brightness))

    assert json.loads(requests[0].content) == {"on": {"on": False}}


@pytest.mark.asyncio
async def test_unbound_group_fails_lazily():
    bridge, requests = make_bridge(ok(envelope({"rid": "scene-1", "rtype": "scene"})), group_id=None)

    with pytest.raises(BridgeNotConfiguredError):
        await bridge.get_group_state()
    with pytest.raises(BridgeNotConfiguredError):
        await bridge.set_group_state(GroupLightUpdate(on=True))
    assert requests == []

    await bridge.recall_scene("scene-1")
    assert len(requests) == 1


# ============================================================================
# Scenes
# ============================================================================

@pytest.mark.asyncio
async def test_recall_scene():
    bridge, requests = make_bridge(ok(envelope({"rid": "scene-1", "rtype": "scene"})))

    await bridge.recall_scene("scene-1")

    assert requests[0].url.path == "/clip/v2/resource/scene/scene-1"
    assert json.loads(requests[0].content) == {"recall": {"action": "active"}}


@pytest.mark.asyncio
@pytest.mark.parametrize("enabled", [True, False])
async def test_set_dynamics_writes_auto_dynamic(enabled):
    bridge, requests = make_bridge(ok(envelope({"rid": "scene-1", "rtype": "scene"})))

    await bridge.set_dynamics("scene-1", enabled)

    assert json.loads(requests[0].content) == {"auto_dynamic": enabled}


@pytest.mark.asyncio
async def test_unknown_scene_is_not_found():
    not_found = httpx.Response(404, json=envelope(errors=[{"description": "Not Found"}]))
    bridge, _ = make_bridge(lambda request: not_found)

    with pytest.raises(BridgeNotFoundError):
        await bridge.recall_scene("missing")
    with pytest.raises(BridgeNotFoundError):
        await bridge.set_dynamics("missing", True)


# ============================================================================
# Failures
# ============================================================================

def refuse_connection(request):
    raise httpx.ConnectError("refused", request=request)


@pytest.mark.asyncio
@pytest.mark.parametrize("responder", [
    refuse_connection,
    lambda request: httpx.Response(403, json=envelope(errors=[{"description": "unauthorized user"}])),
    ok(envelope(errors=[{"description": "device (grouped_light) is soft offline"}])),
    ok({"unexpected": True}),
    ok(envelope()),
    ok({"errors": ["soft offline"], "data": []}),
    ok({"errors": "soft offline", "data": []}),
    ok(envelope("not a resource")),
    ok(envelope({"on": {"on": True}, "dimming": "full"})),
])
async def test_failures_are_unreachable(responder):
    bridge, _ = make_bridge(responder)

    with pytest.raises(BridgeUnreachableError):
        await bridge.get_group_state()


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [
    envelope(),
    envelope("bridge"),
    {"errors": ["soft offline"], "data": []},
])
async def test_check_connection_rejects_malformed_bridge_resource(body):
    bridge, _ = make_bridge(ok(body))

    with pytest.raises(BridgeUnreachableError):
        await bridge.check_connection()


@pytest.mark.asyncio
async def test_check_connection_reads_bridge_resource():
    bridge, requests = make_bridge(ok(envelope({"id": "b1", "bridge_id": "001788fffe000000"})))

    await bridge.check_connection()

    assert requests[0].url.path == "/clip/v2/resource/bridge"
    await bridge.close()
