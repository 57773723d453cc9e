"""Load `config.toml` into typed settings and build the engine configuration."""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import Mapping

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for older runtimes
    import tomli as tomllib  # type: ignore

from app_config_parser import parse_app_config
from app_config_schema import (
    CONFIG_FILE_ENV,
    DEFAULT_CONFIG_FILE,
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    TimerSettings,
    UIServerSettings,
)
from pomodoro import Configuration, InvalidConfiguration, apply_preset

__all__ = [
    "AppConfig",
    "AppConfigurationError",
    "LoggingSettings",
    "TimerSettings",
    "UIServerSettings",
    "build_timer_configuration",
    "load_app_config",
    "resolve_config_path",
]


def resolve_config_path(config_path: str | None = None) -> Path:
    env_path = os.getenv(CONFIG_FILE_ENV)
    raw = config_path or env_path or DEFAULT_CONFIG_FILE
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (Path.cwd() / path).resolve()
    if path.exists():
        return path

    # Packaged fallback: use bundled config.toml when no explicit path is provided.
    if config_path is None and env_path is None:
        bundle_root = Path(getattr(sys, "_MEIPASS", ""))
        if str(bundle_root):
            bundled_path = bundle_root / DEFAULT_CONFIG_FILE
            if bundled_path.exists():
                return bundled_path

    return path


def load_app_config(config_path: str | None = None) -> AppConfig:
    path = resolve_config_path(config_path)
    if not path.exists():
        raise AppConfigurationError(f"Config file not found: {path}")
    if not path.is_file():
        raise AppConfigurationError(f"Config path is not a file: {path}")

    try:
        with open(path, "rb") as fh:
            raw = tomllib.load(fh)
    except Exception as error:
        raise AppConfigurationError(f"Failed to parse config TOML: {error}") from error

    if not isinstance(raw, Mapping):
        raise AppConfigurationError("Root config TOML object must be a table.")

    return parse_app_config(raw, base_dir=path.parent, source_file=str(path))


def build_timer_configuration(settings: TimerSettings) -> Configuration:
    """Translate validated `[timer]` settings into an engine configuration."""
    try:
        configuration = Configuration.from_seconds(
            settings.work_seconds,
            settings.short_break_seconds,
            settings.long_break_seconds,
            long_break_every=settings.long_break_every,
        )
        if settings.preset:
            configuration = apply_preset(configuration, settings.preset)
    except InvalidConfiguration as error:
        raise AppConfigurationError(f"Invalid [timer] settings: {error}") from error
    return configuration
