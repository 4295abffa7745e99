"""Tests for layered nnrm settings."""

from pathlib import Path

import pytest

from nnrm_core.errors import SettingsError
from nnrm_core.settings import NnrmSettings, default_config_dir


def test_defaults_use_platform_config_dir() -> None:
    settings = NnrmSettings.load(env={})
    assert settings.config_dir == default_config_dir()
    assert settings.custom_registries_file == default_config_dir() / "registries.json"
    assert settings.probe_timeout_seconds == 5.0
    assert settings.probe_workers == 8
    assert settings.local_config_name == ".npmrc"
    assert settings.log_level == "warning"


def test_config_file_overrides_defaults(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text(
        '[nnrm]\nprobe_timeout_seconds = 2.5\nprobe_workers = 3\nregistries_file = "custom.json"\nlog_level = "INFO"\n',
        encoding="utf-8",
    )

    settings = NnrmSettings.load(env={"NNRM_CONFIG_DIR": str(tmp_path)})

    assert settings.config_dir == tmp_path
    assert settings.custom_registries_file == tmp_path / "custom.json"
    assert settings.probe_timeout_seconds == 2.5
    assert settings.probe_workers == 3
    assert settings.log_level == "info"


def test_environment_wins_over_config_file(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text("[nnrm]\nprobe_timeout_seconds = 2.5\n", encoding="utf-8")
    store = tmp_path / "elsewhere" / "regs.json"

    settings = NnrmSettings.load(
        env={
            "NNRM_CONFIG_DIR": str(tmp_path),
            "NNRM_PROBE_TIMEOUT": "0.75",
            "NNRM_REGISTRIES_FILE": str(store),
            "NNRM_LOG_LEVEL": "debug",
        }
    )

    assert settings.probe_timeout_seconds == 0.75
    assert settings.custom_registries_file == store
    assert settings.log_level == "debug"


def test_malformed_config_file_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "config.toml").write_text("[nnrm\nbroken", encoding="utf-8")
    settings = NnrmSettings.load(env={"NNRM_CONFIG_DIR": str(tmp_path)})
    assert settings.probe_timeout_seconds == 5.0


@pytest.mark.parametrize("value", ["abc", "0", "-1"])
def test_invalid_probe_timeout_rejected(tmp_path: Path, value: str) -> None:
    with pytest.raises(SettingsError):
        NnrmSettings.load(env={"NNRM_CONFIG_DIR": str(tmp_path), "NNRM_PROBE_TIMEOUT": value})


def test_unknown_log_level_rejected(tmp_path: Path) -> None:
    with pytest.raises(SettingsError, match="log_level"):
        NnrmSettings.load(env={"NNRM_CONFIG_DIR": str(tmp_path), "NNRM_LOG_LEVEL": "verbose"})
