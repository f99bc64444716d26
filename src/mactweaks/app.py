"""Composition helpers for wiring macOS Tweaks.

Builds the registry once, then the executor, tracker and controller on
top of it. Front ends call build_app() and take what they need; tests pass
their own categories and executor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from mactweaks.config import AppConfig
from mactweaks.core.controller import TweakController
from mactweaks.core.executor import CommandExecutor, Executor, timeout_from_env
from mactweaks.core.navigation import NavigationEngine
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.state import StateTracker
from mactweaks.core.types import Category

logger = logging.getLogger(__name__)


@dataclass
class TweaksApp:
    """The wired object graph for one process.

    Attributes:
        registry: Validated catalog.
        executor: Runs shell command lines.
        tracker: Per-tweak state, shared by every front end.
        controller: Apply/revert orchestration.
        config: Colors and theme.
    """

    registry: TweakRegistry
    executor: Executor
    tracker: StateTracker
    controller: TweakController
    config: AppConfig = field(default_factory=AppConfig)

    def navigator(self) -> NavigationEngine:
        """A fresh navigation engine (cursor at the first category)."""
        return NavigationEngine(self.registry, self.controller)


def build_app(
    categories: Iterable[Category] | None = None,
    executor: Executor | None = None,
    config: AppConfig | None = None,
) -> TweaksApp:
    """Wire registry, executor, tracker and controller.

    Args:
        categories: Catalog to use. Defaults to the built-in catalog.
        executor: Command runner. Defaults to CommandExecutor() configured
            from MACTWEAKS_SHELL / MACTWEAKS_COMMAND_TIMEOUT.
        config: Loaded configuration. Defaults to built-in colors.

    Returns:
        TweaksApp ready to use.

    Raises:
        CatalogError: The catalog failed validation.

    Example:
        >>> app = build_app()
        >>> engine = app.navigator()
        >>> engine.visible_items()[:2]
        ['Dock', 'Animated Wallpapers']
    """
    registry = TweakRegistry.build(categories)
    executor = executor if executor is not None else CommandExecutor(timeout=timeout_from_env())
    tracker = StateTracker.for_registry(registry)
    controller = TweakController(registry, executor, tracker)
    logger.debug("app_built: categories=%d, tweaks=%d", len(registry.categories()), len(registry))
    return TweaksApp(
        registry=registry,
        executor=executor,
        tracker=tracker,
        controller=controller,
        config=config if config is not None else AppConfig(),
    )
