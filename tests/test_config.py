"""Tests for the color scheme / theme configuration file."""

from __future__ import annotations

import json
from dataclasses import replace

import pytest

from mactweaks.config import (
    PRESETS,
    AppConfig,
    ColorScheme,
    config_path,
    is_valid_hex,
    load_config,
)


def write(path, data) -> None:
    path.write_text(data if isinstance(data, str) else json.dumps(data))


class TestHex:
    """Tests for hex color helpers."""

    @pytest.mark.parametrize("value", ["#fe640b", "#FFFFFF", "#000000"])
    def test_valid(self, value):
        assert is_valid_hex(value)

    @pytest.mark.parametrize("value", ["fe640b", "#fff", "#gggggg", "", None, 123])
    def test_invalid(self, value):
        assert not is_valid_hex(value)


class TestLoadConfig:
    """Tests for load_config()."""

    def test_config_path_env_override(self, tmp_path):
        assert config_path() == tmp_path / "config.json"

    def test_missing_file_created_with_defaults(self, tmp_path):
        path = tmp_path / "nested" / "config.json"
        config = load_config(path)

        assert config.color_scheme == ColorScheme()
        assert path.exists()
        data = json.loads(path.read_text())
        assert data["theme"] == "default"
        assert data["color_scheme"] == {}

    def test_switching_theme_in_created_file(self, tmp_path):
        """Editing "theme" in the generated file picks up the preset colors."""
        path = tmp_path / "config.json"
        load_config(path)
        data = json.loads(path.read_text())
        data["theme"] = "nord"
        write(path, data)

        config = load_config(path)
        assert config.theme == "nord"
        assert config.color_scheme == PRESETS["nord"]
        assert config.color_scheme.primary == "#88c0d0"

    def test_missing_file_not_created_when_disabled(self, tmp_path):
        path = tmp_path / "config.json"
        load_config(path, create=False)
        assert not path.exists()

    def test_malformed_json_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, "{not json")
        config = load_config(path)
        assert config.color_scheme == ColorScheme()
        assert path.read_text() == "{not json"

    def test_non_object_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, [1, 2])
        assert load_config(path).color_scheme == ColorScheme()

    def test_partial_and_invalid_keys(self, tmp_path):
        """Valid keys apply; invalid and missing keys keep their defaults."""
        path = tmp_path / "config.json"
        write(path, {"color_scheme": {"primary": "#123456", "error": "red", "bogus": "#000000"}})
        scheme = load_config(path).color_scheme
        assert scheme.primary == "#123456"
        assert scheme.error == "#ff0000"
        assert scheme.accent == "#00ff00"

    def test_theme_preset(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, {"theme": "Nord"})
        config = load_config(path)
        assert config.theme == "nord"
        assert config.color_scheme == PRESETS["nord"]

    def test_explicit_colors_override_preset(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, {"theme": "dracula", "color_scheme": {"primary": "#ABCDEF"}})
        scheme = load_config(path).color_scheme
        assert scheme.primary == "#abcdef"
        assert scheme.error == PRESETS["dracula"].error

    def test_unknown_theme_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, {"theme": "solarized"})
        config = load_config(path)
        assert config.theme == "default"
        assert config.color_scheme == ColorScheme()

    def test_color_scheme_wrong_type(self, tmp_path):
        path = tmp_path / "config.json"
        write(path, {"color_scheme": "orange"})
        assert load_config(path).color_scheme == ColorScheme()


class TestAppConfig:
    """Tests for AppConfig serialization."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        scheme = ColorScheme(primary="#111111")
        AppConfig(color_scheme=scheme, theme="mono").save(path)

        config = load_config(path)
        assert config.theme == "mono"
        assert config.color_scheme.primary == "#111111"
        assert config.path == path

    def test_to_dict_shape(self):
        data = AppConfig().to_dict()
        assert data == {"theme": "default", "color_scheme": {}}
        assert len(ColorScheme.keys()) == 8

    def test_to_dict_keeps_only_overrides(self):
        scheme = replace(PRESETS["dracula"], primary="#111111")
        data = AppConfig(color_scheme=scheme, theme="dracula").to_dict()
        assert data["color_scheme"] == {"primary": "#111111"}
