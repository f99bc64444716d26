"""Tests for StateTracker."""

from __future__ import annotations

import pytest

from mactweaks.core.errors import UnknownTweakError
from mactweaks.core.state import StateTracker
from mactweaks.core.types import ActionKind


class TestStateTracker:
    """Tests for state bookkeeping."""

    def test_for_registry_creates_default_states(self, registry):
        """Every registered tweak starts not applied."""
        tracker = StateTracker.for_registry(registry)
        assert len(tracker) == len(registry)
        assert all(not s.is_applied for s in tracker.snapshots().values())

    def test_record_apply_then_revert(self):
        tracker = StateTracker(["a"])
        state = tracker.record_success("a", ActionKind.APPLIED, "done")
        assert state.is_applied
        assert state.last_action_kind is ActionKind.APPLIED
        assert state.last_result.succeeded
        assert state.last_result.message == "done"

        state = tracker.record_success("a", ActionKind.REVERTED)
        assert not state.is_applied
        assert state.last_action_kind is ActionKind.REVERTED
        assert state.last_result.message is None

    def test_record_success_rejects_none_kind(self):
        with pytest.raises(ValueError):
            StateTracker(["a"]).record_success("a", ActionKind.NONE)

    def test_record_failure_keeps_applied(self):
        """A failure leaves is_applied and last_action_kind alone."""
        tracker = StateTracker(["a"])
        tracker.record_success("a", ActionKind.APPLIED)
        state = tracker.record_failure("a", "boom")
        assert state.is_applied
        assert state.last_action_kind is ActionKind.APPLIED
        assert not state.last_result.succeeded
        assert state.last_result.message == "boom"

    def test_snapshot_is_a_copy(self):
        """Mutating a snapshot does not change the tracker."""
        tracker = StateTracker(["a"])
        snapshot = tracker.snapshot("a")
        snapshot.is_applied = True
        assert not tracker.is_applied("a")

    def test_unknown_name_raises(self):
        tracker = StateTracker(["a"])
        with pytest.raises(UnknownTweakError):
            tracker.snapshot("b")
        with pytest.raises(UnknownTweakError):
            tracker.record_success("b", ActionKind.APPLIED)

    def test_contains(self):
        tracker = StateTracker(["a"])
        assert "a" in tracker
        assert "b" not in tracker
