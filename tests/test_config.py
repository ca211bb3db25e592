from __future__ import annotations

from pathlib import Path

import pytest

from wallet_secure.core import config as app_config


def test_load_config_reads_yaml(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv(app_config.LOG_LEVEL_ENV, raising=False)
    config_file = tmp_path / "app.yaml"
    config_file.write_text(
        "store:\n  seed_demo_data: false\n"
        "logging:\n  level: debug\n  retention_days: 30\n"
        "ui:\n  splash_delay_ms: 500\n",
        encoding="utf-8",
    )

    config = app_config.load_config(config_file)

    assert config.store.seed_demo_data is False
    assert config.logging.level == "DEBUG"
    assert config.logging.retention_days == 30
    assert config.ui.splash_delay_ms == 500


def test_load_config_missing_file_uses_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.delenv(app_config.LOG_LEVEL_ENV, raising=False)

    config = app_config.load_config(tmp_path / "missing.yaml")

    assert config == app_config.AppConfig()


def test_log_level_env_overrides_file(tmp_path: Path, monkeypatch) -> None:
    config_file = tmp_path / "app.yaml"
    config_file.write_text("logging:\n  level: INFO\n", encoding="utf-8")
    monkeypatch.setenv(app_config.LOG_LEVEL_ENV, "warning")

    config = app_config.load_config(config_file)

    assert config.logging.level == "WARNING"


def test_config_path_from_env(tmp_path: Path, monkeypatch) -> None:
    config_file = tmp_path / "custom.yaml"
    monkeypatch.setenv(app_config.CONFIG_PATH_ENV, str(config_file))

    assert app_config.resolve_default_config_path() == config_file


def test_invalid_config_raises(tmp_path: Path) -> None:
    config_file = tmp_path / "app.yaml"
    config_file.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(RuntimeError):
        app_config.load_config(config_file)
