from __future__ import annotations

from hardware.input.input_source_interface import IInputEventSource
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class InputDeviceShutdownHandler(IShutdownHandler):
    """
    Closes the input device.

    Priority: 50 (after the event loop task is gone)
    """

    def __init__(self, source: IInputEventSource):
        self.source = source

    @property
    def shutdown_priority(self) -> int:
        return 50

    async def shutdown(self) -> None:
        log.info("Closing input device...")
        self.source.close()
