"""Theme system shared by the navigator and the CLI.

A ColorScheme (from mactweaks.config) is turned into:
- a prompt_toolkit Style for the full-screen navigator
- a rich Theme for CLI output

Style class names are the same in both so renderers can stay symmetric.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style
from rich.theme import Theme

from mactweaks.config import ColorScheme


def create_theme(scheme: ColorScheme) -> Theme:
    """Create a rich Theme for CLI output."""
    return Theme(
        {
            "title": f"bold {scheme.primary}",
            "category": f"bold {scheme.primary}",
            "tweak": scheme.secondary,
            "hint": scheme.accent,
            "text": scheme.text,
            "dim": scheme.text_dim,
            "success": f"bold {scheme.success}",
            "warning": f"bold {scheme.warning}",
            "error": f"bold {scheme.error}",
            "applied": scheme.success,
        }
    )


def create_style(scheme: ColorScheme) -> Style:
    """Create a prompt_toolkit Style for the navigator."""
    return Style.from_dict(
        {
            # Frame
            "frame.border": scheme.text_dim,
            "frame.label": f"bold {scheme.primary}",
            # Content
            "title": f"bold {scheme.primary}",
            "category": f"bold {scheme.primary}",
            "tweak": scheme.secondary,
            "group": f"italic {scheme.text_dim}",
            "selected": f"bold reverse {scheme.primary}",
            "hint": scheme.accent,
            "text": scheme.text,
            "dim": scheme.text_dim,
            # Status
            "success": f"bold {scheme.success}",
            "warning": f"bold {scheme.warning}",
            "error": f"bold {scheme.error}",
            "applied": scheme.success,
            # Confirmation dialog
            "dialog": f"{scheme.text}",
            "dialog.title": f"bold {scheme.warning}",
        }
    )

