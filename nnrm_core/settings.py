"""Layered settings for nnrm: defaults, user config.toml, then environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

import tomllib
from platformdirs import user_config_dir

from .errors import SettingsError

logger = logging.getLogger(__name__)

DEFAULT_APP_NAME = "nnrm"
CONFIG_FILE_NAME = "config.toml"
REGISTRIES_FILE_NAME = "registries.json"
LOCAL_CONFIG_NAME = ".npmrc"
LOG_LEVELS = ("debug", "info", "warning", "error")

_DEFAULTS: dict[str, Any] = {
    "probe_timeout_seconds": 5.0,
    "probe_workers": 8,
    "command_timeout_seconds": 30.0,
    "log_level": "warning",
}
_ENV_KEY_MAP: dict[str, str] = {
    "config_dir": "NNRM_CONFIG_DIR",
    "registries_file": "NNRM_REGISTRIES_FILE",
    "probe_timeout_seconds": "NNRM_PROBE_TIMEOUT",
    "log_level": "NNRM_LOG_LEVEL",
}


def default_config_dir() -> Path:
    """Return the platform-specific config directory for nnrm."""

    return Path(user_config_dir(DEFAULT_APP_NAME, appauthor=False))


def _load_config_from_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("rb") as handle:
            data = tomllib.load(handle)
    except (OSError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring unreadable settings file %s: %s", path, exc)
        return {}
    section = data.get(DEFAULT_APP_NAME)
    if not isinstance(section, dict):
        return {}
    return section


def _positive_float(key: str, value: Any) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{key} must be a number, got {value!r}") from exc
    if number <= 0:
        raise SettingsError(f"{key} must be greater than zero, got {value!r}")
    return number


def _log_level(value: Any) -> str:
    level = str(value).strip().lower()
    if level not in LOG_LEVELS:
        raise SettingsError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
    return level


def _positive_int(key: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as exc:
        raise SettingsError(f"{key} must be an integer, got {value!r}") from exc
    if number <= 0:
        raise SettingsError(f"{key} must be greater than zero, got {value!r}")
    return number


@dataclass(frozen=True)
class NnrmSettings:
    config_dir: Path
    custom_registries_file: Path
    probe_timeout_seconds: float = 5.0
    probe_workers: int = 8
    command_timeout_seconds: float = 30.0
    local_config_name: str = LOCAL_CONFIG_NAME
    log_level: str = "warning"

    @classmethod
    def load(cls, env: Mapping[str, str] | None = None) -> "NnrmSettings":
        """Resolve settings using environment, config.toml, defaults order."""

        env = os.environ if env is None else env
        config_dir_value = env.get(_ENV_KEY_MAP["config_dir"])
        config_dir = Path(config_dir_value).expanduser() if config_dir_value else default_config_dir()

        values: dict[str, Any] = dict(_DEFAULTS)
        values.update(_load_config_from_file(config_dir / CONFIG_FILE_NAME))
        for key, env_key in _ENV_KEY_MAP.items():
            if key == "config_dir":
                continue
            if raw := env.get(env_key):
                values[key] = raw

        registries_file = values.get("registries_file")
        if registries_file:
            custom_file = Path(str(registries_file)).expanduser()
            if not custom_file.is_absolute():
                custom_file = config_dir / custom_file
        else:
            custom_file = config_dir / REGISTRIES_FILE_NAME

        return cls(
            config_dir=config_dir,
            custom_registries_file=custom_file,
            probe_timeout_seconds=_positive_float(
                "probe_timeout_seconds", values["probe_timeout_seconds"]
            ),
            probe_workers=_positive_int("probe_workers", values["probe_workers"]),
            command_timeout_seconds=_positive_float(
                "command_timeout_seconds", values["command_timeout_seconds"]
            ),
            log_level=_log_level(values["log_level"]),
        )
