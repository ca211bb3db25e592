"""Configuration loader for store, logging, and UI settings."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass(frozen=True)
class StoreConfig:
    seed_demo_data: bool = True


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"
    retention_days: int = 1095


@dataclass(frozen=True)
class UiConfig:
    splash_delay_ms: int = 2000


@dataclass(frozen=True)
class AppConfig:
    store: StoreConfig = field(default_factory=StoreConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    ui: UiConfig = field(default_factory=UiConfig)


DEFAULT_CONFIG_REL_PATH = Path("config/app.yaml")
CONFIG_PATH_ENV = "WALLET_SECURE_CONFIG_PATH"
LOG_LEVEL_ENV = "WALLET_SECURE_LOG_LEVEL"


def resolve_default_config_path() -> Path:
    """Resolve configuration path for source and packaged execution."""
    env_path = os.getenv(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path)

    candidates: list[Path] = []

    if getattr(sys, "frozen", False):
        exe_dir = Path(sys.executable).resolve().parent
        candidates.append(exe_dir / DEFAULT_CONFIG_REL_PATH)

    candidates.append(Path.cwd() / DEFAULT_CONFIG_REL_PATH)
    candidates.append(Path(__file__).resolve().parents[3] / DEFAULT_CONFIG_REL_PATH)

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return candidates[0]


def _section(raw: dict, name: str) -> dict:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise RuntimeError(f"Config section '{name}' must be a mapping.")
    return value


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load the app configuration from YAML, falling back to defaults."""
    path = config_path or resolve_default_config_path()
    if not path.exists():
        raw: dict = {}
    else:
        with path.open("r", encoding="utf-8") as file:
            try:
                raw = yaml.safe_load(file) or {}
            except yaml.YAMLError as error:
                raise RuntimeError(f"Invalid configuration file: {path}") from error
        if not isinstance(raw, dict):
            raise RuntimeError(f"Invalid configuration file: {path}")

    store = _section(raw, "store")
    logging_section = _section(raw, "logging")
    ui = _section(raw, "ui")

    level = os.getenv(LOG_LEVEL_ENV) or str(logging_section.get("level", "INFO"))

    return AppConfig(
        store=StoreConfig(
            seed_demo_data=bool(store.get("seed_demo_data", True)),
        ),
        logging=LoggingConfig(
            level=level.upper(),
            retention_days=int(logging_section.get("retention_days", 1095)),
        ),
        ui=UiConfig(
            splash_delay_ms=int(ui.get("splash_delay_ms", 2000)),
        ),
    )
