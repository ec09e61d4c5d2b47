from __future__ import annotations

from bridge.bridge_interface import IBridgeAdapter
from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class BridgeShutdownHandler(IShutdownHandler):
    """
    Closes the bridge HTTP client.

    Priority: 10 (last)
    """

    def __init__(self, bridge: IBridgeAdapter):
        self.bridge = bridge

    @property
    def shutdown_priority(self) -> int:
        return 10

    async def shutdown(self) -> None:
        log.info("Closing bridge connection...")
        await self.bridge.close()
