"""
Runtime configuration model
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

from models.enums import BridgeApiVersion, InputKey, LogLevel

DEFAULT_DEVICE_PATH = "/dev/input/event0"
DEFAULT_BRIGHTNESS_STEP = 25
DEFAULT_REQUEST_TIMEOUT = 5.0


class ConfigError(ValueError):
    """Missing or invalid configuration value"""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")


@dataclass(frozen=True)
class AppConfig:
    """
    Process configuration, read-only after startup.

    group_id is kept as a string: the v1 API wants a small integer, the v2
    API an opaque grouped_light id. ConfigManager validates the v1 form.
    """
    bridge_host: str
    bridge_username: str
    group_id: Optional[str]
    api_version: BridgeApiVersion = BridgeApiVersion.V1
    key_code: int = int(InputKey.F17)
    device_path: str = DEFAULT_DEVICE_PATH
    scenes: Tuple[str, ...] = field(default_factory=tuple)
    brightness_step: int = DEFAULT_BRIGHTNESS_STEP
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    verify_tls: bool = False
    log_level: LogLevel = LogLevel.INFO
