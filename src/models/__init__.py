"""
Models package - enums, bindings and domain values for the knob controller
"""

from .enums import InputEventClass, KeyState, InputKey, LightAction, BridgeApiVersion, LogLevel, LogCategory
from .bindings import ActionBinding

__all__ = [
    'InputEventClass',
    'KeyState',
    'InputKey',
    'LightAction',
    'BridgeApiVersion',
    'LogLevel',
    'LogCategory',
    'ActionBinding',
]
