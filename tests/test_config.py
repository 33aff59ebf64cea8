from __future__ import annotations

import json

from snape.config import AppConfig, AppTheme, is_valid_window_size, load_config, save_config


def test_load_config_missing_file(tmp_path) -> None:
    path = tmp_path / "settings.json"
    config, error = load_config(path)
    assert error is None
    assert config == AppConfig()


def test_save_and_load_config_roundtrip(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    config = AppConfig(window_width=300, window_height=500, theme=AppTheme.DARK)
    error = save_config(config, path)
    assert error is None
    loaded, error = load_config(path)
    assert error is None
    assert loaded == config


def test_load_config_invalid_json(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not-json", encoding="utf-8")
    config, error = load_config(path)
    assert config == AppConfig()
    assert error is not None


def test_load_config_requires_object(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("[420, 550]", encoding="utf-8")
    config, error = load_config(path)
    assert config == AppConfig()
    assert error is not None and "JSON object" in error


def test_load_config_ignores_out_of_range_and_unknown_values(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(
        json.dumps({"window_width": 900, "window_height": True, "theme": "Neon"}),
        encoding="utf-8",
    )
    config, error = load_config(path)
    assert error is None
    assert config == AppConfig()


def test_theme_is_saved_by_name(tmp_path) -> None:
    path = tmp_path / "settings.json"
    save_config(AppConfig(theme=AppTheme.LIGHT), path)
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["theme"] == "Light"


def test_window_size_range_is_inclusive() -> None:
    assert is_valid_window_size(200)
    assert is_valid_window_size(600)
    assert not is_valid_window_size(199)
    assert not is_valid_window_size(601)


def test_load_config_accepts_whole_float_sizes(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"window_width": 300.0, "window_height": 601}), encoding="utf-8")
    config, error = load_config(path)
    assert error is None
    assert config.window_width == 300
    assert config.window_height == AppConfig().window_height


def test_save_config_reports_unwritable_path(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    error = save_config(AppConfig(), blocker / "settings.json")
    assert error is not None and error.startswith("Failed to save settings to")
