from __future__ import annotations

from pathlib import Path

from platformdirs import user_config_path, user_data_path

APP_NAME = "snape"


def snippets_root() -> Path:
    return user_config_path(APP_NAME)


def settings_path() -> Path:
    return user_data_path(APP_NAME) / "settings.json"
