"""
Enums for the knob controller: input codes, actions, bridge generations, logging
"""

from enum import Enum, IntEnum, auto


class InputEventClass(IntEnum):
    """Linux input event classes we care about (see linux/input-event-codes.h)"""
    SYN = 0x00
    KEY = 0x01


class KeyState(IntEnum):
    """Value field of an EV_KEY event"""
    RELEASED = 0
    PRESSED = 1
    HOLD = 2      # autorepeat


class InputKey(IntEnum):
    """
    Key codes emitted by the knob device (sudo evtest)

    The knob press is the default primary code but it can be rebound.
    """
    F15 = 185   # Scene button, left
    F16 = 186   # Scene button, right
    F17 = 187   # Knob press
    F18 = 188   # Knob turned left
    F19 = 189   # Knob turned right


class LightAction(Enum):
    """Semantic actions the dispatcher knows how to perform"""
    TOGGLE_POWER = auto()
    DIM = auto()
    BRIGHTEN = auto()
    NEXT_SCENE = auto()
    TOGGLE_DYNAMICS = auto()


class BridgeApiVersion(Enum):
    """Bridge protocol generation"""
    V1 = "v1"   # Flat API, small integer ids
    V2 = "v2"   # CLIP v2 resource graph, opaque ids


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # Input device open/close
    INPUT = auto()       # Raw key events
    ACTION = auto()      # Dispatcher decisions
    BRIDGE = auto()      # Bridge HTTP traffic
    SYSTEM = auto()      # Startup, shutdown, errors
    SHUTDOWN = auto()
    GENERAL = auto()
