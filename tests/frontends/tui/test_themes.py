"""Tests for theme conversion."""

from __future__ import annotations

from prompt_toolkit.styles import Style
from rich.theme import Theme

from mactweaks.config import ColorScheme
from mactweaks.frontends.tui.themes import create_style, create_theme


class TestThemes:
    """Tests for Style/Theme creation."""

    def test_create_theme_uses_scheme_colors(self):
        theme = create_theme(ColorScheme(error="#123456"))
        assert isinstance(theme, Theme)
        assert "#123456" in str(theme.styles["error"])

    def test_create_style(self):
        style = create_style(ColorScheme())
        assert isinstance(style, Style)
        rules = dict(style.style_rules)
        assert "#fe640b" in rules["selected"]
        assert rules["dim"] == "#808080"
