# hardware/input/evdev_input_source.py
import asyncio
import select
from typing import List, Optional, Tuple

from evdev import InputDevice, list_devices, ecodes

from hardware.input.input_source_interface import RawInputEvent
from models.enums import InputKey
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class EvdevInputSource:
    """
    Knob input via Linux evdev (/dev/input/event*)

    - open() fails fast with OSError when the device cannot be opened
    - Reads run in the default executor: a select() with timeout followed by
      device.read(), so a cancelled task never waits longer than poll_timeout
    - Events are returned raw; filtering is the event loop's job
    """

    def __init__(self, device_path: str, poll_timeout: float = 0.5):
        self.device_path = device_path
        self.poll_timeout = poll_timeout
        self.device: Optional[InputDevice] = None

    def open(self) -> None:
        self.device = InputDevice(self.device_path)
        log.info("Input device opened", device=self.device.name, path=self.device_path)

    async def read_events(self) -> List[RawInputEvent]:
        if self.device is None:
            raise OSError(f"input device {self.device_path} is not open")
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._read_batch)

    def _read_batch(self) -> List[RawInputEvent]:
        ready, _, _ = select.select([self.device.fd], [], [], self.poll_timeout)
        if not ready:
            return []
        try:
            return [RawInputEvent(e.type, e.code, e.value) for e in self.device.read()]
        except BlockingIOError:
            # Woken without data (another reader drained it)
            return []

    def close(self) -> None:
        if self.device is None:
            return
        try:
            self.device.close()
            log.info("Input device closed", path=self.device_path)
        except OSError as e:
            log.warn(f"Error closing input device: {e}")
        finally:
            self.device = None


def find_knob_devices() -> List[Tuple[str, str]]:
    """
    List (path, name) of input devices that emit the knob's key codes.

    Used to give a useful hint when the configured path cannot be opened.
    """
    wanted = {int(code) for code in InputKey}
    candidates = []

    for path in list_devices():
        try:
            device = InputDevice(path)
        except OSError as e:
            log.debug(f"Cannot open {path}: {e}")
            continue

        try:
            raw_keys = device.capabilities().get(ecodes.EV_KEY, [])
            key_codes = {code if isinstance(code, int) else code[0] for code in raw_keys}
            if wanted & key_codes:
                candidates.append((path, device.name))
        except OSError as e:
            log.debug(f"Cannot inspect {path}: {e}")
        finally:
            device.close()

    return candidates
