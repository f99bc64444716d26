"""macOS Tweaks - browse and toggle macOS system tweaks from the terminal.

Tweaks are small, named shell commands (Dock settings, sleep timers, cache
cleanups, Homebrew management) grouped into categories. Each can be
applied and, when it has a revert command, reverted.

Layers:
    core/       Catalog, registry, executor, state, controller, navigation
    config      Color scheme / theme file
    app         Wiring of the core components
    frontends/  User interfaces (CLI, interactive navigator)

Quick Start:
    >>> from mactweaks.app import build_app
    >>>
    >>> app = build_app()
    >>> result = app.controller.apply("Auto-hide Dock")
    >>> app.controller.status("Auto-hide Dock").is_applied
    True
"""

from mactweaks.__version__ import __version__
from mactweaks.core import (
    ActionKind,
    ApplicationState,
    Category,
    CommandExecutor,
    NavigationEngine,
    Tweak,
    TweakAction,
    TweakController,
    TweakError,
    TweakRegistry,
)

__all__ = [
    "__version__",
    # Types
    "ActionKind",
    "ApplicationState",
    "Category",
    "Tweak",
    "TweakAction",
    "TweakError",
    # Components
    "CommandExecutor",
    "NavigationEngine",
    "TweakController",
    "TweakRegistry",
]
