"""Domain models - light state values and interaction state"""

from models.domain.light import (
    GroupLightState,
    GroupLightUpdate,
    clamp_brightness,
    percent_to_native,
    native_to_percent,
    MIN_BRIGHTNESS,
    MAX_BRIGHTNESS,
)
from models.domain.interaction import InteractionState, parse_scene_list

__all__ = [
    "GroupLightState",
    "GroupLightUpdate",
    "clamp_brightness",
    "percent_to_native",
    "native_to_percent",
    "MIN_BRIGHTNESS",
    "MAX_BRIGHTNESS",
    "InteractionState",
    "parse_scene_list",
]
