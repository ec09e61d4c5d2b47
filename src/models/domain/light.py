"""
Group light value types and brightness arithmetic.

Brightness is carried on the bridge's native 0-254 scale everywhere in the
core. Backends that speak percent convert at their own boundary with
percent_to_native / native_to_percent.
"""

from dataclasses import dataclass
from typing import Optional

MIN_BRIGHTNESS = 0
MAX_BRIGHTNESS = 254


def clamp_brightness(value: int) -> int:
    """Saturate value into [MIN_BRIGHTNESS, MAX_BRIGHTNESS] (never wraps)"""
    return max(MIN_BRIGHTNESS, min(MAX_BRIGHTNESS, value))


def percent_to_native(percent: float) -> int:
    return clamp_brightness(round(percent / 100.0 * MAX_BRIGHTNESS))


def native_to_percent(native: int) -> float:
    return native / MAX_BRIGHTNESS * 100.0


@dataclass(frozen=True)
class GroupLightState:
    """Last-known power and brightness of a light group, as read from the bridge"""
    on: bool
    brightness: int = 0

    def __post_init__(self):
        if not MIN_BRIGHTNESS <= self.brightness <= MAX_BRIGHTNESS:
            raise ValueError(f"brightness {self.brightness} outside 0-254")


@dataclass(frozen=True)
class GroupLightUpdate:
    """
    Desired state for a light group.

    brightness=None means "change power only". A brightness of 0 is also
    sent as "leave brightness alone" by the adapters, see BridgeAdapter docs.
    """
    on: bool
    brightness: Optional[int] = None

    @property
    def changes_brightness(self) -> bool:
        # 0 doubles as the unspecified sentinel on the wire
        return bool(self.brightness)
