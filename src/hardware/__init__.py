"""
Hardware Layer

Low-level input device access only. The evdev implementation is imported
from hardware.input.evdev_input_source so the rest of the package does not
need evdev installed.
"""
from .input.input_source_interface import IInputEventSource, RawInputEvent

__all__ = [
    "IInputEventSource",
    "RawInputEvent",
]
