"""TweakController - apply/revert orchestration.

The controller resolves a tweak from the registry, hands its command to
the executor, and records the outcome in the state tracker. It never
prompts: confirmation for tweaks that require it is the caller's job.

Rules:
    - Unknown names raise UnknownTweakError and touch no state.
    - revert() on a tweak without a revert command raises
      NotRevertibleError without running anything.
    - A failed command keeps is_applied as it was, records the failure,
      and raises ApplyFailedError / RevertFailedError with the outcome.
    - No rollback after a failed apply; no short-circuit when the tweak is
      already applied (there is no oracle for the real OS state).
    - run_item() runs a listing tweak's per-item command and records
      nothing; failures raise ItemFailedError.
"""

from __future__ import annotations

import logging

from mactweaks.core.errors import (
    ApplyFailedError,
    ItemFailedError,
    NotListableError,
    NotRevertibleError,
    RevertFailedError,
)
from mactweaks.core.executor import Executor
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.state import StateTracker
from mactweaks.core.types import ActionResult, ApplicationState, CommandOutcome, TweakAction

logger = logging.getLogger(__name__)


class TweakController:
    """Runs tweak actions and keeps their state.

    Args:
        registry: The tweak catalog.
        executor: Runs command lines.
        tracker: State store. Defaults to a fresh tracker for the registry.

    Example:
        >>> controller = TweakController(registry, CommandExecutor())
        >>> result = controller.apply("Auto-hide Dock")
        >>> controller.status("Auto-hide Dock").is_applied
        True
    """

    def __init__(
        self,
        registry: TweakRegistry,
        executor: Executor,
        tracker: StateTracker | None = None,
    ) -> None:
        self.registry = registry
        self.executor = executor
        self.tracker = tracker if tracker is not None else StateTracker.for_registry(registry)

    def apply(self, name: str) -> ActionResult:
        """Run a tweak's apply command.

        Raises:
            UnknownTweakError: No such tweak.
            ApplyFailedError: The command reported failure.
        """
        return self.run(name, TweakAction.APPLY)

    def revert(self, name: str) -> ActionResult:
        """Run a tweak's revert command.

        Raises:
            UnknownTweakError: No such tweak.
            NotRevertibleError: The tweak has no revert command.
            RevertFailedError: The command reported failure.
        """
        return self.run(name, TweakAction.REVERT)

    def run(self, name: str, action: TweakAction) -> ActionResult:
        """Run either action by enum."""
        tweak = self.registry.find(name)

        if action is TweakAction.REVERT and not tweak.revertible:
            logger.info("revert_rejected: tweak=%s, reason=not_revertible", name)
            raise NotRevertibleError(name)

        command = tweak.command_for(action)
        logger.info("action_start: action=%s, tweak=%s", action.value, name)
        outcome = self.executor.run(command, interactive=tweak.interactive)

        if not outcome.succeeded:
            self.tracker.record_failure(name, outcome.message)
            logger.info(
                "action_failed: action=%s, tweak=%s, error=%s",
                action.value,
                name,
                outcome.error,
            )
            error_cls = ApplyFailedError if action is TweakAction.APPLY else RevertFailedError
            raise error_cls(name, outcome)

        state = self.tracker.record_success(
            name, action.completed_kind, outcome.captured_output.strip()
        )
        logger.info(
            "action_complete: action=%s, tweak=%s, duration_ms=%.0f",
            action.value,
            name,
            outcome.duration_ms,
        )
        return ActionResult(tweak=tweak, action=action, outcome=outcome, state=state)

    def run_item(self, name: str, item: str) -> CommandOutcome:
        """Run a listing tweak's item command on one item.

        The tweak's applied state is left alone.

        Raises:
            UnknownTweakError: No such tweak.
            NotListableError: The tweak has no item command.
            ItemFailedError: The command reported failure.
        """
        tweak = self.registry.find(name)
        if not tweak.lists_items:
            logger.info("item_rejected: tweak=%s, reason=not_listable", name)
            raise NotListableError(name)

        logger.info("item_start: tweak=%s, item=%s", name, item)
        outcome = self.executor.run(tweak.command_for_item(item), interactive=tweak.item_interactive)
        if not outcome.succeeded:
            logger.info("item_failed: tweak=%s, item=%s, error=%s", name, item, outcome.error)
            raise ItemFailedError(name, outcome)

        logger.info("item_complete: tweak=%s, item=%s, duration_ms=%.0f", name, item, outcome.duration_ms)
        return outcome

    def status(self, name: str) -> ApplicationState:
        """Snapshot of a tweak's state.

        Raises:
            UnknownTweakError: No such tweak.
        """
        self.registry.find(name)
        return self.tracker.snapshot(name)

    def statuses(self) -> dict[str, ApplicationState]:
        """Snapshots of every tweak's state, in registry order."""
        return self.tracker.snapshots()
