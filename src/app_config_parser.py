"""Typed parser for config.toml sections into immutable app settings."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from app_config_schema import (
    AppConfig,
    AppConfigurationError,
    LoggingSettings,
    TimerSettings,
    UIServerSettings,
)
from pomodoro import PRESETS

_ALLOWED_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_app_config(
    raw: Mapping[str, Any],
    *,
    base_dir: Path,
    source_file: str,
) -> AppConfig:
    """Parse raw TOML mappings into strongly typed application settings."""
    timer = _parse_timer_settings(_section(raw, "timer"))
    ui_server = _parse_ui_server_settings(_section(raw, "ui_server"), base_dir=base_dir)
    logging_settings = _parse_logging_settings(_section(raw, "logging"))

    return AppConfig(
        timer=timer,
        ui_server=ui_server,
        logging=logging_settings,
        source_file=source_file,
    )


def _parse_timer_settings(section: Mapping[str, Any]) -> TimerSettings:
    preset = _as_str(section.get("preset", ""), "timer.preset").lower()
    if preset and preset not in PRESETS:
        allowed = ", ".join(sorted(PRESETS))
        raise AppConfigurationError(f"timer.preset must be one of: {allowed}.")

    long_break_every = _as_int(section.get("long_break_every", 4), "timer.long_break_every")
    if long_break_every < 1:
        raise AppConfigurationError("timer.long_break_every must be at least 1.")

    tick_interval_ms = _as_int(section.get("tick_interval_ms", 1000), "timer.tick_interval_ms")
    if tick_interval_ms <= 0:
        raise AppConfigurationError("timer.tick_interval_ms must be greater than zero.")

    return TimerSettings(
        work_seconds=_as_non_negative_int(
            section.get("work_seconds", 25 * 60),
            "timer.work_seconds",
        ),
        short_break_seconds=_as_non_negative_int(
            section.get("short_break_seconds", 5 * 60),
            "timer.short_break_seconds",
        ),
        long_break_seconds=_as_non_negative_int(
            section.get("long_break_seconds", 15 * 60),
            "timer.long_break_seconds",
        ),
        long_break_every=long_break_every,
        tick_interval_ms=tick_interval_ms,
        preset=preset,
    )


def _parse_ui_server_settings(
    section: Mapping[str, Any],
    *,
    base_dir: Path,
) -> UIServerSettings:
    return UIServerSettings(
        enabled=_as_bool(section.get("enabled", True), "ui_server.enabled"),
        host=_as_str(section.get("host", "127.0.0.1"), "ui_server.host"),
        port=_as_int(section.get("port", 8765), "ui_server.port"),
        index_file=_resolve_path(
            base_dir,
            _as_str(section.get("index_file", ""), "ui_server.index_file"),
        ),
    )


def _parse_logging_settings(section: Mapping[str, Any]) -> LoggingSettings:
    level = _as_str(section.get("level", "INFO"), "logging.level").upper()
    if level not in _ALLOWED_LOG_LEVELS:
        allowed = ", ".join(sorted(_ALLOWED_LOG_LEVELS))
        raise AppConfigurationError(f"logging.level must be one of: {allowed}.")
    return LoggingSettings(level=level)


def _section(root: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    raw = root.get(name, {})
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise AppConfigurationError(f"[{name}] must be a table.")
    return raw


def _as_str(value: Any, field: str) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    raise AppConfigurationError(f"{field} must be a string.")


def _as_bool(value: Any, field: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "1", "yes", "on"):
            return True
        if lowered in ("false", "0", "no", "off"):
            return False
    raise AppConfigurationError(f"{field} must be a boolean.")


def _as_int(value: Any, field: str) -> int:
    if isinstance(value, bool):
        raise AppConfigurationError(f"{field} must be an integer.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as error:
            raise AppConfigurationError(f"{field} must be an integer.") from error
    raise AppConfigurationError(f"{field} must be an integer.")


def _as_non_negative_int(value: Any, field: str) -> int:
    number = _as_int(value, field)
    if number < 0:
        raise AppConfigurationError(f"{field} must not be negative.")
    return number


def _resolve_path(base_dir: Path, raw: str) -> str:
    if not raw:
        return ""
    path = Path(raw).expanduser()
    if not path.is_absolute():
        path = (base_dir / path).resolve()
    return str(path)
