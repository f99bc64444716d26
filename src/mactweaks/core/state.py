"""StateTracker - per-tweak applied/reverted bookkeeping.

Holds one ApplicationState per registered tweak, keyed by name. States
are created up front from the registry and only ever mutated through
record_success() / record_failure(), which the controller calls after a
command completes. Readers get copies, never the live objects.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import TYPE_CHECKING

from mactweaks.core.errors import UnknownTweakError
from mactweaks.core.types import ActionKind, ActionOutcome, ApplicationState

if TYPE_CHECKING:
    from mactweaks.core.registry import TweakRegistry

logger = logging.getLogger(__name__)


class StateTracker:
    """Mapping from tweak name to its ApplicationState."""

    def __init__(self, names: Iterable[str] = ()) -> None:
        self._states: dict[str, ApplicationState] = {name: ApplicationState() for name in names}

    @classmethod
    def for_registry(cls, registry: TweakRegistry) -> StateTracker:
        """Create default states for every tweak in a registry."""
        return cls(registry.names())

    def __contains__(self, name: object) -> bool:
        return name in self._states

    def __len__(self) -> int:
        return len(self._states)

    def _live(self, name: str) -> ApplicationState:
        try:
            return self._states[name]
        except KeyError:
            raise UnknownTweakError(name) from None

    def snapshot(self, name: str) -> ApplicationState:
        """Copy of one tweak's state.

        Raises:
            UnknownTweakError: If the name was never registered.
        """
        return replace(self._live(name))

    def snapshots(self) -> dict[str, ApplicationState]:
        """Copies of all states, in registration order."""
        return {name: replace(state) for name, state in self._states.items()}

    def is_applied(self, name: str) -> bool:
        return self._live(name).is_applied

    def record_success(self, name: str, kind: ActionKind, message: str | None = None) -> ApplicationState:
        """Record a completed apply or revert.

        Args:
            name: Tweak name.
            kind: ActionKind.APPLIED or ActionKind.REVERTED.
            message: Optional output worth keeping.

        Returns:
            Snapshot of the updated state.
        """
        if kind is ActionKind.NONE:
            raise ValueError("record_success needs APPLIED or REVERTED")
        state = self._live(name)
        state.is_applied = kind is ActionKind.APPLIED
        state.last_action_kind = kind
        state.last_result = ActionOutcome(succeeded=True, message=message or None)
        logger.debug("state_updated: tweak=%s, kind=%s", name, kind.value)
        return replace(state)

    def record_failure(self, name: str, message: str) -> ApplicationState:
        """Record a failed command. is_applied and last_action_kind are kept."""
        state = self._live(name)
        state.last_result = ActionOutcome(succeeded=False, message=message)
        logger.debug("state_failure_recorded: tweak=%s", name)
        return replace(state)
