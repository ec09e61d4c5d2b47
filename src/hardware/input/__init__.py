from .input_source_interface import IInputEventSource, RawInputEvent

__all__ = [
    "IInputEventSource",
    "RawInputEvent",
]
