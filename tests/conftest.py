import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from models.domain.interaction import InteractionState
from models.domain.light import GroupLightState
from controllers.action_dispatcher import ActionDispatcher


@pytest.fixture
def bridge():
    """Bridge adapter double: every operation is an AsyncMock"""
    mock = AsyncMock()
    mock.get_group_state.return_value = GroupLightState(on=True, brightness=100)
    mock.set_group_state.return_value = None
    mock.recall_scene.return_value = None
    mock.set_dynamics.return_value = None
    return mock


@pytest.fixture
def scenes():
    return ("s1", "s2", "s3")


@pytest.fixture
def dispatcher(bridge, scenes):
    return ActionDispatcher(bridge, InteractionState(scenes=scenes), brightness_step=25)
