from .bridge_shutdown_handler import BridgeShutdownHandler
from .input_device_shutdown_handler import InputDeviceShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler

__all__ = [
    "BridgeShutdownHandler",
    "InputDeviceShutdownHandler",
    "TaskCancellationHandler",
]
