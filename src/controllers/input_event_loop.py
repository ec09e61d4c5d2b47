"""
InputEventLoop - pulls raw events from the device and feeds the dispatcher

Strictly sequential: one batch is read, each qualifying press is dispatched
and awaited in arrival order, then the next batch is read. Nothing is
buffered or coalesced.
"""

import asyncio

from controllers.action_dispatcher import ActionDispatcher
from hardware.input.input_source_interface import IInputEventSource, RawInputEvent
from models.bindings import ActionBinding
from models.enums import InputEventClass, KeyState
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.INPUT)

DEFAULT_READ_RETRY_DELAY = 0.1


class InputEventLoop:
    """Key-down filter + code lookup in front of the ActionDispatcher"""

    def __init__(
        self,
        source: IInputEventSource,
        binding: ActionBinding,
        dispatcher: ActionDispatcher,
        read_retry_delay: float = DEFAULT_READ_RETRY_DELAY,
    ):
        self.source = source
        self.binding = binding
        self.dispatcher = dispatcher
        self.read_retry_delay = read_retry_delay
        self._running = False

    @property
    def running(self) -> bool:
        return self._running

    async def run(self) -> None:
        """Read and dispatch until stop() is called or the task is cancelled"""
        self._running = True
        log.info("Starting event monitoring", bindings=self.binding.describe())

        try:
            while self._running:
                try:
                    events = await self.source.read_events()
                except OSError as e:
                    log.warn(f"Error reading events: {e}")
                    await asyncio.sleep(self.read_retry_delay)
                    continue

                for event in events:
                    try:
                        await self.process_event(event)
                    except Exception as e:
                        log.error(f"Unexpected error handling event: {e}", code=event.code, exc_info=True)

        except asyncio.CancelledError:
            log.debug("Event loop cancelled (task stopped)")
            raise
        finally:
            self._running = False

    async def process_event(self, event: RawInputEvent) -> bool:
        """
        Handle one raw event.

        Returns True when the event was dispatched as an action.
        """
        if event.type != InputEventClass.KEY:
            return False

        log.debug("Key event", type=event.type, code=event.code, value=event.value)

        # Only key down; release and autorepeat are dropped
        if event.value != KeyState.PRESSED:
            return False

        action = self.binding.resolve(event.code)
        if action is None:
            return False

        log.info("Key pressed", code=event.code, action=action.name)
        await self.dispatcher.dispatch(action)
        return True

    def stop(self) -> None:
        """Ask the loop to exit after the current batch"""
        self._running = False
