"""
Config Manager

Builds the immutable AppConfig from four layers, highest precedence first:
command-line flags, environment variables, an optional YAML file, defaults.
"""

import argparse
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence

import yaml

from models.config import (
    AppConfig,
    ConfigError,
    DEFAULT_BRIGHTNESS_STEP,
    DEFAULT_DEVICE_PATH,
    DEFAULT_REQUEST_TIMEOUT,
)
from models.domain.interaction import parse_scene_list
from models.enums import BridgeApiVersion, InputKey, LogLevel
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

CONFIG_ENV_VAR = "HUE_CONFIG"


# ===== Value parsers =====

def _parse_int(key: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"expected an integer, got {value!r}")


def _parse_positive_int(key: str, value: Any) -> int:
    number = _parse_int(key, value)
    if number <= 0:
        raise ConfigError(key, f"must be positive, got {number}")
    return number


def _parse_timeout(key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigError(key, f"expected a number of seconds, got {value!r}")
    if number <= 0:
        raise ConfigError(key, f"must be positive, got {number}")
    return number


def _parse_bool(key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("1", "true", "yes", "on"):
        return True
    if text in ("0", "false", "no", "off", ""):
        return False
    raise ConfigError(key, f"expected a boolean, got {value!r}")


def _parse_api_version(key: str, value: Any) -> BridgeApiVersion:
    if isinstance(value, BridgeApiVersion):
        return value
    text = str(value).strip().lower()
    for version in BridgeApiVersion:
        if text == version.value:
            return version
    raise ConfigError(key, f"expected one of v1, v2, got {value!r}")


def _parse_log_level(key: str, value: Any) -> LogLevel:
    text = str(value).strip().upper()
    if text == "WARNING":
        text = "WARN"
    try:
        return LogLevel[text]
    except KeyError:
        raise ConfigError(key, f"unknown log level {value!r}")


def _parse_scenes(key: str, value: Any):
    if isinstance(value, (list, tuple)):
        return tuple(str(v).strip() for v in value if str(v).strip())
    return parse_scene_list(str(value))


def _parse_str(key: str, value: Any) -> str:
    return str(value).strip()


@dataclass(frozen=True)
class Setting:
    """One configurable field and where it can come from"""
    key: str
    env: Sequence[str]
    parse: Callable[[str, Any], Any]
    default: Any = None
    required: bool = False


SETTINGS: List[Setting] = [
    Setting("bridge_host", ("HUE_BRIDGE_IP",), _parse_str, required=True),
    Setting("bridge_username", ("HUE_USERNAME",), _parse_str, required=True),
    Setting("group_id", ("HUE_GROUP_ID", "HUE_LIGHT_ID"), _parse_str),
    Setting("api_version", ("HUE_API_VERSION",), _parse_api_version, BridgeApiVersion.V1),
    Setting("key_code", ("HUE_KEY_CODE",), _parse_int, int(InputKey.F17)),
    Setting("device_path", ("HUE_DEVICE_PATH",), _parse_str, DEFAULT_DEVICE_PATH),
    Setting("scenes", ("HUE_SCENE_IDS",), _parse_scenes, ()),
    Setting("brightness_step", ("HUE_BRIGHTNESS_STEP",), _parse_positive_int, DEFAULT_BRIGHTNESS_STEP),
    Setting("request_timeout", ("HUE_REQUEST_TIMEOUT",), _parse_timeout, DEFAULT_REQUEST_TIMEOUT),
    Setting("verify_tls", ("HUE_VERIFY_TLS",), _parse_bool, False),
    Setting("log_level", ("HUE_LOG_LEVEL",), _parse_log_level, LogLevel.INFO),
]


def build_arg_parser() -> argparse.ArgumentParser:
    """Flags default to None so an unset flag falls through to the next layer"""
    parser = argparse.ArgumentParser(
        prog="hueknob",
        description="Drive a Hue bridge light group from a rotary knob input device.",
    )
    parser.add_argument("--config", help=f"YAML config file (env {CONFIG_ENV_VAR})")
    parser.add_argument("--bridge-ip", dest="bridge_host", help="bridge host or IP (env HUE_BRIDGE_IP)")
    parser.add_argument("--username", dest="bridge_username",
                        help="bridge username / application key (env HUE_USERNAME)")
    parser.add_argument("--group-id", dest="group_id",
                        help="light group id: integer for v1, grouped_light id for v2 (env HUE_GROUP_ID)")
    parser.add_argument("--api-version", dest="api_version", choices=[v.value for v in BridgeApiVersion],
                        help="bridge protocol generation (env HUE_API_VERSION, default v1)")
    parser.add_argument("--key-code", dest="key_code", help="power toggle key code (env HUE_KEY_CODE, default 187 / F17)")
    parser.add_argument("--device", dest="device_path", help=f"input device (env HUE_DEVICE_PATH, default {DEFAULT_DEVICE_PATH})")
    parser.add_argument("--scenes", dest="scenes", help="comma-separated scene ids (env HUE_SCENE_IDS)")
    parser.add_argument("--brightness-step", dest="brightness_step", help="brightness change per knob step (default 25)")
    parser.add_argument("--timeout", dest="request_timeout", help="per-request bridge timeout in seconds (default 5)")
    parser.add_argument("--verify-tls", dest="verify_tls", action=argparse.BooleanOptionalAction, default=None,
                        help="verify the bridge TLS certificate (v2 only)")
    parser.add_argument("--log-level", dest="log_level", help="DEBUG, INFO, WARN or ERROR")
    return parser


class ConfigManager:
    """
    Configuration loader

    Example:
        config = ConfigManager().load(sys.argv[1:], os.environ)
        config.bridge_host, config.scenes, ...
    """

    def __init__(self, parser: Optional[argparse.ArgumentParser] = None):
        self.parser = parser or build_arg_parser()
        self.sources: Dict[str, str] = {}

    def load(
        self,
        argv: Optional[Sequence[str]] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> AppConfig:
        """
        Resolve every setting and validate the result.

        Raises:
            ConfigError: required value missing or a value fails to parse
        """
        environ = os.environ if environ is None else environ
        args = vars(self.parser.parse_args(argv))

        config_path = args.get("config") or environ.get(CONFIG_ENV_VAR)
        file_data = self._load_yaml(Path(config_path)) if config_path else {}

        values: Dict[str, Any] = {}
        for setting in SETTINGS:
            raw, source = self._lookup(setting, args, environ, file_data)
            if raw is None or raw == "":
                if setting.required:
                    env_names = " / ".join(setting.env)
                    raise ConfigError(setting.key, f"required (flag, {env_names} or config file)")
                values[setting.key] = setting.default
                self.sources[setting.key] = "default"
                continue
            values[setting.key] = setting.parse(setting.key, raw)
            self.sources[setting.key] = source

        config = AppConfig(**values)
        self._validate(config)

        log.info(
            "Configuration loaded",
            bridge=config.bridge_host,
            api=config.api_version.value,
            group=config.group_id,
            device=config.device_path,
            key_code=config.key_code,
            scenes=len(config.scenes),
        )
        log.debug("Configuration sources", **self.sources)
        return config

    def _lookup(self, setting: Setting, args: Dict[str, Any], environ: Mapping[str, str], file_data: Dict[str, Any]):
        if args.get(setting.key) is not None:
            return args[setting.key], "flag"
        for name in setting.env:
            if environ.get(name):
                return environ[name], f"env:{name}"
        if file_data.get(setting.key) is not None:
            return file_data[setting.key], "file"
        return None, "default"

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            raise ConfigError("config", f"file not found: {path}")
        except yaml.YAMLError as ex:
            raise ConfigError("config", f"invalid YAML in {path}: {ex}")

        if not isinstance(data, dict):
            raise ConfigError("config", f"{path} must contain a mapping")

        log.info(f"Loaded {path.name}", keys=str(list(data.keys())))
        return data

    def _validate(self, config: AppConfig) -> None:
        if config.api_version is BridgeApiVersion.V1:
            if not config.group_id:
                raise ConfigError("group_id", "required for the v1 API")
            _parse_int("group_id", config.group_id)
        elif not config.group_id:
            # v2 reports NotConfigured on the first group operation
            log.warn("No grouped_light id configured; power and brightness actions will fail")
