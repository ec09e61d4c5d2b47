"""
Shutdown handler protocol for component-based graceful shutdown.

Each component that needs cleanup implements IShutdownHandler to take part
in the shutdown sequence.
"""

from typing import Protocol


class IShutdownHandler(Protocol):
    """
    Protocol for components that need graceful shutdown.

    Example:
        class InputDeviceShutdownHandler:
            @property
            def shutdown_priority(self) -> int:
                return 30

            async def shutdown(self) -> None:
                self.source.close()
    """

    @property
    def shutdown_priority(self) -> int:
        """Higher priority shuts down earlier."""
        ...

    async def shutdown(self) -> None:
        """Called during coordinated shutdown."""
        ...
