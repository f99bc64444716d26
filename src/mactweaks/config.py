"""Color scheme / theme configuration file.

The file lives at ~/.config/macos-tweaks/config.json (override with
MACTWEAKS_CONFIG) and looks like:

    {
      "theme": "nord",
      "color_scheme": {
        "primary": "#fe640b"
      }
    }

"theme" picks a preset; any valid key in "color_scheme" overrides that
preset's color. Saving writes only the colors that differ from the preset.
Loading never fails: a missing file is created with the default theme, and
malformed JSON, unknown themes or invalid colors are logged as warnings and
replaced by defaults key by key.
"""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "MACTWEAKS_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/macos-tweaks/config.json")
DEFAULT_THEME_NAME = "default"

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def is_valid_hex(value: Any) -> bool:
    """True for strings of the form #rrggbb."""
    return isinstance(value, str) and bool(_HEX_COLOR.match(value))


@dataclass(frozen=True)
class ColorScheme:
    """The eight named colors used by both front ends.

    Attributes:
        primary: Titles, highlighted selection.
        secondary: Regular list entries.
        accent: Key hints, markers.
        success: Success messages, "applied" marks.
        warning: Confirmation prompts.
        error: Error messages.
        text: Body text.
        text_dim: Descriptions, secondary information.
    """

    primary: str = "#fe640b"
    secondary: str = "#ffffff"
    accent: str = "#00ff00"
    success: str = "#00ff00"
    warning: str = "#ffa500"
    error: str = "#ff0000"
    text: str = "#ffffff"
    text_dim: str = "#808080"

    @classmethod
    def keys(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_dict(self) -> dict[str, str]:
        return {key: getattr(self, key) for key in self.keys()}

    def merged(self, overrides: dict[str, Any]) -> ColorScheme:
        """Copy with valid overrides applied; invalid or unknown keys are skipped."""
        valid: dict[str, str] = {}
        for key, value in overrides.items():
            if key not in self.keys():
                logger.warning("config_unknown_color: key=%s", key)
            elif not is_valid_hex(value):
                logger.warning("config_invalid_color: key=%s, value=%r", key, value)
            else:
                valid[key] = value.lower()
        return replace(self, **valid)


PRESETS: dict[str, ColorScheme] = {
    "default": ColorScheme(),
    "nord": ColorScheme(
        primary="#88c0d0",
        secondary="#e5e9f0",
        accent="#81a1c1",
        success="#a3be8c",
        warning="#ebcb8b",
        error="#bf616a",
        text="#eceff4",
        text_dim="#4c566a",
    ),
    "dracula": ColorScheme(
        primary="#bd93f9",
        secondary="#f8f8f2",
        accent="#8be9fd",
        success="#50fa7b",
        warning="#ffb86c",
        error="#ff5555",
        text="#f8f8f2",
        text_dim="#6272a4",
    ),
    "mono": ColorScheme(
        primary="#ffffff",
        secondary="#d0d0d0",
        accent="#ffffff",
        success="#ffffff",
        warning="#d0d0d0",
        error="#ffffff",
        text="#d0d0d0",
        text_dim="#808080",
    ),
}


def config_path() -> Path:
    """Path of the config file, honoring MACTWEAKS_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override).expanduser() if override else DEFAULT_CONFIG_PATH.expanduser()


@dataclass
class AppConfig:
    """Resolved configuration.

    Attributes:
        color_scheme: Final colors (preset plus overrides).
        theme: Preset name the colors started from.
        path: File the config was loaded from, if any.
    """

    color_scheme: ColorScheme = field(default_factory=ColorScheme)
    theme: str = DEFAULT_THEME_NAME
    path: Path | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the on-disk JSON shape.

        Only colors that differ from the theme's preset are written, so
        changing "theme" in a saved file takes effect.
        """
        preset = PRESETS.get(self.theme, PRESETS[DEFAULT_THEME_NAME]).to_dict()
        return {
            "theme": self.theme,
            "color_scheme": {
                key: value
                for key, value in self.color_scheme.to_dict().items()
                if value != preset[key]
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any], path: Path | None = None) -> AppConfig:
        """Build from parsed JSON, falling back to defaults per key."""
        theme = data.get("theme", DEFAULT_THEME_NAME)
        if not isinstance(theme, str) or theme.lower() not in PRESETS:
            logger.warning("config_unknown_theme: theme=%r", theme)
            theme = DEFAULT_THEME_NAME
        theme = theme.lower()

        scheme = PRESETS[theme]
        overrides = data.get("color_scheme", {})
        if isinstance(overrides, dict):
            scheme = scheme.merged(overrides)
        else:
            logger.warning("config_invalid_color_scheme: type=%s", type(overrides).__name__)

        return cls(color_scheme=scheme, theme=theme, path=path)

    def save(self, path: Path | None = None) -> Path:
        """Write the config as JSON, creating parent directories.

        Returns:
            The path written.
        """
        target = path or self.path or config_path()
        target.parent.mkdir(parents=True, exist_ok=True)
        with open(target, "w") as f:
            json.dump(self.to_dict(), f, indent=2)
            f.write("\n")
        return target


def load_config(path: Path | None = None, create: bool = True) -> AppConfig:
    """Load the config file.

    Args:
        path: File to read. Defaults to config_path().
        create: Write a default file when none exists.

    Returns:
        The resolved AppConfig. Never raises for file problems.
    """
    path = path or config_path()

    if not path.exists():
        config = AppConfig(path=path)
        if create:
            try:
                config.save(path)
                logger.info("config_created: path=%s", path)
            except OSError as e:
                logger.warning("config_create_failed: path=%s, error=%s", path, e)
        return config

    try:
        with open(path) as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("config_unreadable: path=%s, error=%s", path, e)
        return AppConfig(path=path)

    if not isinstance(data, dict):
        logger.warning("config_invalid: path=%s, reason=not_an_object", path)
        return AppConfig(path=path)

    logger.debug("config_loaded: path=%s", path)
    return AppConfig.from_dict(data, path=path)
