from .action_dispatcher import ActionDispatcher
from .input_event_loop import InputEventLoop

__all__ = [
    'ActionDispatcher',
    'InputEventLoop',
]
