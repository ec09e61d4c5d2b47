"""
main_asyncio.py - Application entry point for hueknob
------------------------------------------------------

Responsible for:
- loading configuration (flags > environment > YAML file > defaults)
- opening the input device and verifying the bridge (fail fast)
- wiring the event loop, dispatcher and bridge adapter
- graceful shutdown on SIGINT / SIGTERM
"""

import sys

# ---------------------------------------------------------------------------
# UTF-8 ENCODING FIX (log symbols on Raspberry Pi consoles)
# ---------------------------------------------------------------------------

if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore
if hasattr(sys.stderr, 'reconfigure') and sys.stderr.encoding != 'UTF-8':
    sys.stderr.reconfigure(encoding='utf-8')  # type: ignore

import asyncio
from typing import Optional, Sequence

from bridge import BridgeError, create_bridge
from controllers import ActionDispatcher, InputEventLoop
from hardware.input.evdev_input_source import EvdevInputSource, find_knob_devices
from lifecycle import ShutdownCoordinator
from lifecycle.handlers import BridgeShutdownHandler, InputDeviceShutdownHandler, TaskCancellationHandler
from managers import ConfigManager
from models import ActionBinding
from models.config import ConfigError
from models.domain import InteractionState
from models.enums import LogCategory, LogLevel
from utils.logger import get_logger, configure_logger

# ---------------------------------------------------------------------------
# LOGGER SETUP
# ---------------------------------------------------------------------------

log = get_logger().for_category(LogCategory.SYSTEM)

EXIT_OK = 0
EXIT_STARTUP_FAILED = 1
EXIT_BAD_CONFIG = 2


# ---------------------------------------------------------------------------
# Application Entry
# ---------------------------------------------------------------------------

async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main async entry point. Returns the process exit status."""

    configure_logger(LogLevel.INFO, use_colors=sys.stderr.isatty(), stream=sys.stderr)

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    try:
        config = ConfigManager().load(argv)
    except ConfigError as e:
        log.error("Invalid configuration", error=str(e))
        return EXIT_BAD_CONFIG

    configure_logger(config.log_level, use_colors=sys.stderr.isatty(), stream=sys.stderr)
    log.info("Starting hueknob...")

    # ========================================================================
    # 2. INPUT DEVICE
    # ========================================================================

    source = EvdevInputSource(config.device_path)
    try:
        source.open()
    except OSError as e:
        log.error("Failed to open input device", path=config.device_path, error=str(e))
        candidates = find_knob_devices()
        if candidates:
            log.info("Devices emitting knob key codes", details=[f"{p} ({n})" for p, n in candidates])
        return EXIT_STARTUP_FAILED

    # ========================================================================
    # 3. BRIDGE
    # ========================================================================

    bridge = create_bridge(config)
    try:
        await bridge.check_connection()
    except BridgeError as e:
        log.error("Failed to connect to bridge", host=config.bridge_host, error=e.code, cause=str(e))
        source.close()
        await bridge.close()
        return EXIT_STARTUP_FAILED

    # ========================================================================
    # 4. CONTROL CORE
    # ========================================================================

    dispatcher = ActionDispatcher(
        bridge=bridge,
        state=InteractionState(scenes=config.scenes),
        brightness_step=config.brightness_step,
    )
    event_loop = InputEventLoop(
        source=source,
        binding=ActionBinding(config.key_code),
        dispatcher=dispatcher,
    )
    event_task = asyncio.create_task(event_loop.run(), name="InputEventLoop")

    # ========================================================================
    # 5. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(TaskCancellationHandler([event_task]))
    coordinator.register(InputDeviceShutdownHandler(source))
    coordinator.register(BridgeShutdownHandler(bridge))
    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Application initialized. Waiting for exit signal...")

    await coordinator.wait_for_shutdown([event_task])
    crashed = event_task.done()

    await coordinator.shutdown_all()
    log.info("hueknob shut down cleanly." if not crashed else "hueknob stopped after event loop failure.")
    return EXIT_STARTUP_FAILED if crashed else EXIT_OK


def run() -> None:
    """Console script entry point"""
    try:
        status = asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")
        status = EXIT_OK
    sys.exit(status)


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    run()
