"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Manages signal handlers, shutdown sequencing, and error handling across
multiple shutdown handlers in priority order.
"""

import asyncio
import signal
from typing import Dict, Iterable, List, Optional, Set

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)


class ShutdownCoordinator:
    """
    Coordinates graceful shutdown of multiple components.

    Maintains a list of shutdown handlers and executes them in priority order
    when shutdown is triggered.

    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(TaskCancellationHandler([event_task]))
        coordinator.register(BridgeShutdownHandler(bridge))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown([event_task])
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        """
        Args:
            timeout_per_handler: Timeout for each individual handler (seconds)
            total_timeout: Total timeout for entire shutdown sequence (seconds)
        """
        self._handlers: List = []
        self._shutdown_event: Optional[asyncio.Event] = None
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self._shutdown_trigger: Dict[str, Optional[str]] = {"reason": None}

    @property
    def reason(self) -> Optional[str]:
        return self._shutdown_trigger["reason"]

    def register(self, handler) -> None:
        """
        Register a shutdown handler.

        Handler must have:
        - shutdown_priority property (int)
        - async shutdown() method
        """
        if not hasattr(handler, "shutdown_priority"):
            raise ValueError(f"Handler {handler} missing shutdown_priority property")
        if not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} missing shutdown() method")

        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT and SIGTERM handlers on the running loop."""
        self._shutdown_event = asyncio.Event()

        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))

        log.debug("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        """Trigger shutdown (called from signal handlers, usable from tests)."""
        if self._shutdown_event is None:
            self._shutdown_event = asyncio.Event()
        if self._shutdown_event.is_set():
            return
        self._shutdown_trigger["reason"] = reason
        log.info(f"{reason} received → triggering shutdown")
        self._shutdown_event.set()

    async def wait_for_shutdown(self, critical_tasks: Iterable[asyncio.Task] = ()) -> None:
        """
        Wait for a shutdown request or for a critical task to end.

        A critical task that finishes (cleanly or not) while no shutdown was
        requested is treated as a failure of the application.
        """
        if self._shutdown_event is None:
            raise RuntimeError("Call setup_signal_handlers() first")

        shutdown_waiter = asyncio.ensure_future(self._shutdown_event.wait())
        wait_set: Set[asyncio.Future] = {shutdown_waiter, *critical_tasks}

        try:
            done, _ = await asyncio.wait(wait_set, return_when=asyncio.FIRST_COMPLETED)
        finally:
            if not shutdown_waiter.done():
                shutdown_waiter.cancel()

        if shutdown_waiter in done:
            return

        for task in done:
            if task.cancelled():
                self._shutdown_trigger["reason"] = f"Task cancelled: {task.get_name()}"
            elif task.exception() is not None:
                log.error(f"Critical task failed: {task.get_name()} - {task.exception()!r}")
                self._shutdown_trigger["reason"] = f"Task failure: {task.get_name()}"
            else:
                self._shutdown_trigger["reason"] = f"Task finished: {task.get_name()}"

    async def shutdown_all(self) -> None:
        """
        Execute graceful shutdown of all handlers in priority order.

        Handlers are called in descending priority order (highest first).
        Each handler has its own timeout and the whole sequence has a global one.
        """
        log.info("Shutting down...", reason=self.reason or "UNKNOWN")

        sorted_handlers = sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True)
        loop = asyncio.get_running_loop()
        start_time = loop.time()

        for handler in sorted_handlers:
            handler_name = handler.__class__.__name__

            elapsed = loop.time() - start_time
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {handler_name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"✓ {handler_name} shutdown complete")

            except asyncio.TimeoutError:
                log.error(f"{handler_name} shutdown timeout ({self._timeout_per_handler}s)")

            except Exception as e:
                log.error(f"Error shutting down {handler_name}: {e}", exc_info=True)
                # Continue with other handlers even if one fails

        log.info("Shutdown sequence complete")
