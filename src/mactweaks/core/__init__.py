"""Core - tweak catalog, execution and navigation logic.

Nothing in here knows about terminals, colors or argument parsing; the
front ends under mactweaks.frontends drive these primitives.

Architecture:
    types           Pure data types (Tweak, Category, ApplicationState, ...)
    errors          Exception taxonomy
    catalog         The built-in categories and tweaks
    registry        Validated, indexed view of a catalog
    executor        Runs shell command lines
    state           Per-tweak applied/reverted bookkeeping
    controller      Apply/revert orchestration
    navigation      Mode-based cursor state machine
    logging_config  Central logging setup

Example:
    >>> from mactweaks.core import CommandExecutor, TweakController, TweakRegistry
    >>>
    >>> registry = TweakRegistry.build()
    >>> controller = TweakController(registry, CommandExecutor())
    >>> controller.apply("Flush DNS Cache").state.is_applied
    True
"""

from mactweaks.core.controller import TweakController
from mactweaks.core.errors import (
    ApplyFailedError,
    CatalogError,
    CommandFailedError,
    DuplicateNameError,
    ItemFailedError,
    NotListableError,
    NotRevertibleError,
    RevertFailedError,
    TweakError,
    UnknownItemError,
    UnknownTweakError,
)
from mactweaks.core.executor import CommandExecutor, Executor
from mactweaks.core.navigation import Key, Mode, NavigationEngine, Transition
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.state import StateTracker
from mactweaks.core.types import (
    ActionKind,
    ActionOutcome,
    ActionResult,
    ApplicationState,
    Category,
    CommandOutcome,
    Tweak,
    TweakAction,
)

__all__ = [
    # Types
    "ActionKind",
    "ActionOutcome",
    "ActionResult",
    "ApplicationState",
    "Category",
    "CommandOutcome",
    "Tweak",
    "TweakAction",
    # Errors
    "ApplyFailedError",
    "CatalogError",
    "CommandFailedError",
    "DuplicateNameError",
    "ItemFailedError",
    "NotListableError",
    "NotRevertibleError",
    "RevertFailedError",
    "TweakError",
    "UnknownItemError",
    "UnknownTweakError",
    # Components
    "CommandExecutor",
    "Executor",
    "StateTracker",
    "TweakController",
    "TweakRegistry",
    # Navigation
    "Key",
    "Mode",
    "NavigationEngine",
    "Transition",
]
