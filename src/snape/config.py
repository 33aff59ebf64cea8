from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from .paths import settings_path

CONFIG_VERSION = 1
DEFAULT_WINDOW_WIDTH = 420
DEFAULT_WINDOW_HEIGHT = 550
MIN_WINDOW_SIZE = 200
MAX_WINDOW_SIZE = 600


class AppTheme(Enum):
    SYSTEM = "System"
    LIGHT = "Light"
    DARK = "Dark"

    @classmethod
    def from_name(cls, value: str | None) -> AppTheme:
        for theme in cls:
            if theme.value == value:
                return theme
        return cls.SYSTEM


@dataclass
class AppConfig:
    version: int = CONFIG_VERSION
    window_width: int = DEFAULT_WINDOW_WIDTH
    window_height: int = DEFAULT_WINDOW_HEIGHT
    theme: AppTheme = AppTheme.SYSTEM


def is_valid_window_size(value: int) -> bool:
    return MIN_WINDOW_SIZE <= value <= MAX_WINDOW_SIZE


def load_config(path: Path | None = None) -> tuple[AppConfig, str | None]:
    path = path or settings_path()
    data, error = _read_settings(path)
    if data is None:
        return AppConfig(), error
    return _settings_from_data(data), None


def save_config(config: AppConfig, path: Path | None = None) -> str | None:
    path = path or settings_path()
    payload = {
        "version": config.version,
        "window_width": config.window_width,
        "window_height": config.window_height,
        "theme": config.theme.value,
    }
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(payload, indent=2) + "\n", encoding="utf-8")
    except OSError as exc:
        return f"Failed to save settings to {path} ({exc})"
    return None


def _read_settings(path: Path) -> tuple[dict[str, Any] | None, str | None]:
    if not path.is_file():
        return None, None
    try:
        data = json.loads(path.read_bytes().decode("utf-8"))
    except OSError as exc:
        return None, f"Failed to read settings from {path} ({exc})"
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None, f"Settings file is not valid JSON: {path}"
    if not isinstance(data, dict):
        return None, f"Settings file must be a JSON object: {path}"
    return data, None


def _settings_from_data(data: dict[str, Any]) -> AppConfig:
    theme = data.get("theme")
    return AppConfig(
        version=_settings_version(data.get("version")),
        window_width=_window_size(data.get("window_width"), DEFAULT_WINDOW_WIDTH),
        window_height=_window_size(data.get("window_height"), DEFAULT_WINDOW_HEIGHT),
        theme=AppTheme.from_name(theme.strip() if isinstance(theme, str) else None),
    )


def _settings_version(value: Any) -> int:
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return CONFIG_VERSION


def _window_size(value: Any, default: int) -> int:
    # Saved sizes obey the same range as --width-size/--height-size.
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int):
        return default
    return value if is_valid_window_size(value) else default
