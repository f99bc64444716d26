"""Tests for the NavigationEngine state machine."""

from __future__ import annotations

import pytest

from mactweaks.core.controller import TweakController
from mactweaks.core.errors import (
    ApplyFailedError,
    ItemFailedError,
    NotRevertibleError,
    UnknownItemError,
    UnknownTweakError,
)
from mactweaks.core.navigation import Key, Mode, NavigationEngine
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.types import Category, Tweak, TweakAction


def press(engine: NavigationEngine, *keys: Key):
    transition = None
    for key in keys:
        transition = engine.handle(key)
    return transition


class TestListNavigation:
    """Tests for moving through categories and tweaks."""

    def test_starts_on_category_list(self, engine):
        assert engine.mode is Mode.CATEGORY_LIST
        assert engine.cursor.category_index == 0
        assert engine.selected_tweak is None
        assert engine.visible_items() == ["Dock", "Maintenance", "About"]

    def test_down_and_up_clamp(self, engine):
        """Directional moves clamp at both ends, no wrap."""
        press(engine, Key.UP)
        assert engine.cursor.category_index == 0
        press(engine, Key.DOWN, Key.DOWN, Key.DOWN, Key.DOWN)
        assert engine.cursor.category_index == 2

    def test_lateral_clamp_on_category_list(self, engine):
        """Five rights with three categories ends on the last one."""
        press(engine, *[Key.RIGHT] * 5)
        assert engine.cursor.category_index == 2
        press(engine, *[Key.LEFT] * 5)
        assert engine.cursor.category_index == 0

    def test_select_opens_tweak_list(self, engine):
        press(engine, Key.SELECT)
        assert engine.mode is Mode.TWEAK_LIST
        assert engine.selected_tweak.name == "Auto-hide Dock"
        assert engine.visible_items() == ["Auto-hide Dock", "Small (32px)"]

    def test_tweak_list_moves_clamp(self, engine):
        press(engine, Key.SELECT, Key.DOWN, Key.DOWN, Key.DOWN)
        assert engine.cursor.tweak_index == 1
        assert engine.selected_tweak.name == "Small (32px)"

    def test_lateral_in_tweak_list_resets_index(self, engine):
        """Changing category from the tweak list starts at its first tweak."""
        press(engine, Key.SELECT, Key.DOWN, Key.RIGHT)
        assert engine.mode is Mode.TWEAK_LIST
        assert engine.selected_category.name == "Maintenance"
        assert engine.cursor.tweak_index == 0
        assert engine.selected_tweak.name == "Clear Caches"

    def test_lateral_in_tweak_list_clamps(self, engine):
        press(engine, Key.SELECT, Key.LEFT)
        assert engine.selected_category.name == "Dock"
        press(engine, *[Key.RIGHT] * 5)
        assert engine.selected_category.name == "About"

    def test_lateral_ignored_in_detail(self, engine):
        press(engine, Key.SELECT, Key.SELECT, Key.RIGHT)
        assert engine.mode is Mode.DETAIL
        assert engine.selected_category.name == "Dock"

    def test_back_walks_up(self, engine):
        press(engine, Key.SELECT, Key.SELECT)
        assert engine.mode is Mode.DETAIL
        press(engine, Key.BACK)
        assert engine.mode is Mode.TWEAK_LIST
        press(engine, Key.BACK)
        assert engine.mode is Mode.CATEGORY_LIST

    def test_back_from_category_list_requests_exit(self, engine):
        transition = press(engine, Key.BACK)
        assert transition.exit_requested

    @pytest.mark.parametrize("depth", [0, 1, 2])
    def test_quit_from_any_mode(self, engine, depth):
        press(engine, *[Key.SELECT] * depth)
        mode = engine.mode
        transition = press(engine, Key.QUIT)
        assert transition.exit_requested
        assert engine.mode is mode

    def test_irrelevant_keys_are_noops(self, engine):
        """CONFIRM, CANCEL, APPLY and REVERT do nothing on the category list."""
        for key in (Key.CONFIRM, Key.CANCEL, Key.APPLY, Key.REVERT):
            transition = press(engine, key)
            assert not transition.dispatched
            assert not transition.exit_requested
            assert engine.mode is Mode.CATEGORY_LIST

    def test_select_empty_category_stays(self, executor):
        registry = TweakRegistry.build([Category("Empty"), Category("Full", tweaks=(Tweak("a", "", "echo a"),))])
        engine = NavigationEngine(registry, TweakController(registry, executor))
        transition = press(engine, Key.SELECT)
        assert engine.mode is Mode.CATEGORY_LIST
        assert transition.message == "This category is empty."


class TestDetailActions:
    """Tests for running actions from the detail view."""

    def test_auto_hide_dock_scenario(self, engine, executor, controller, registry):
        """Select Dock, select Auto-hide Dock, Apply, then Revert."""
        tweak = registry.find("Auto-hide Dock")
        press(engine, Key.SELECT, Key.SELECT)
        transition = press(engine, Key.SELECT)

        assert transition.result is not None
        assert transition.message == "Successfully applied: Auto-hide Dock"
        assert engine.mode is Mode.DETAIL
        assert executor.commands == [tweak.apply_command]
        assert controller.status(tweak.name).is_applied

        press(engine, Key.DOWN)
        assert engine.selected_action is TweakAction.REVERT
        transition = press(engine, Key.SELECT)
        assert transition.message == "Successfully reverted: Auto-hide Dock"
        assert executor.commands == [tweak.apply_command, tweak.revert_command]
        assert not controller.status(tweak.name).is_applied

    def test_action_index_clamps(self, engine):
        press(engine, Key.SELECT, Key.SELECT, Key.UP)
        assert engine.selected_action is TweakAction.APPLY
        press(engine, Key.DOWN, Key.DOWN)
        assert engine.selected_action is TweakAction.REVERT

    def test_apply_and_revert_keys(self, engine, executor):
        press(engine, Key.SELECT, Key.SELECT)
        assert press(engine, Key.APPLY).result.action is TweakAction.APPLY
        assert press(engine, Key.REVERT).result.action is TweakAction.REVERT
        assert len(executor.calls) == 2

    def test_not_revertible_captured(self, engine, executor):
        """NotRevertible surfaces in the transition, executor untouched."""
        press(engine, Key.SELECT, Key.DOWN, Key.SELECT)
        transition = press(engine, Key.REVERT)
        assert isinstance(transition.error, NotRevertibleError)
        assert not transition.ok
        assert engine.mode is Mode.DETAIL
        assert executor.calls == []

    def test_command_failure_captured(self, engine, executor, registry):
        executor.fail(registry.find("Auto-hide Dock").apply_command, output="nope")
        press(engine, Key.SELECT, Key.SELECT)
        transition = press(engine, Key.APPLY)
        assert isinstance(transition.error, ApplyFailedError)
        assert "nope" in transition.message
        assert engine.mode is Mode.DETAIL


class TestConfirmation:
    """Tests for the confirmation dialog."""

    def open_clear_caches(self, engine):
        press(engine, Key.DOWN, Key.SELECT, Key.SELECT)
        assert engine.selected_tweak.name == "Clear Caches"

    def test_select_opens_confirmation(self, engine, executor):
        self.open_clear_caches(engine)
        transition = press(engine, Key.SELECT)
        assert engine.mode is Mode.CONFIRMATION
        assert engine.pending_action is TweakAction.APPLY
        assert "Clear Caches" in transition.message
        assert executor.calls == []

    def test_confirm_runs_action(self, engine, executor, controller):
        self.open_clear_caches(engine)
        press(engine, Key.SELECT)
        transition = press(engine, Key.CONFIRM)
        assert transition.result is not None
        assert engine.mode is Mode.DETAIL
        assert engine.pending_action is None
        assert len(executor.calls) == 1
        assert controller.status("Clear Caches").is_applied

    def test_select_confirms_too(self, engine, executor):
        self.open_clear_caches(engine)
        press(engine, Key.SELECT, Key.SELECT)
        assert len(executor.calls) == 1

    @pytest.mark.parametrize("key", [Key.CANCEL, Key.BACK])
    def test_cancel_returns_to_detail(self, engine, executor, key):
        self.open_clear_caches(engine)
        press(engine, Key.SELECT)
        transition = press(engine, key)
        assert engine.mode is Mode.DETAIL
        assert engine.pending_action is None
        assert transition.message == "Action canceled."
        assert executor.calls == []

    def test_navigation_keys_ignored_in_confirmation(self, engine):
        self.open_clear_caches(engine)
        press(engine, Key.SELECT, Key.DOWN, Key.LEFT, Key.APPLY)
        assert engine.mode is Mode.CONFIRMATION
        assert engine.pending_action is TweakAction.APPLY

    def test_revert_of_not_revertible_skips_confirmation(self, engine, executor):
        """Nothing to confirm when the controller will refuse anyway."""
        self.open_clear_caches(engine)
        transition = press(engine, Key.REVERT)
        assert engine.mode is Mode.DETAIL
        assert isinstance(transition.error, NotRevertibleError)
        assert executor.calls == []


class TestFocusAndPreview:
    """Tests for focus() and would_execute()."""

    def test_focus_jumps_to_detail(self, engine):
        engine.focus("Reset Sleep")
        assert engine.mode is Mode.DETAIL
        assert engine.selected_category.name == "Maintenance"
        assert engine.selected_tweak.name == "Reset Sleep"

    def test_focus_unknown_raises(self, engine):
        with pytest.raises(UnknownTweakError):
            engine.focus("Nope")
        assert engine.mode is Mode.CATEGORY_LIST

    def test_request_outside_detail_is_noop(self, engine, executor):
        transition = engine.request(TweakAction.APPLY)
        assert not transition.dispatched
        assert executor.calls == []

    def test_would_execute(self, engine):
        assert engine.would_execute(Key.SELECT) is None
        engine.focus("Auto-hide Dock")
        assert engine.would_execute(Key.SELECT).name == "Auto-hide Dock"
        assert engine.would_execute(Key.DOWN) is None

    def test_would_execute_confirmation_flow(self, engine):
        engine.focus("Reset Sleep")
        assert engine.would_execute(Key.APPLY) is None
        press(engine, Key.APPLY)
        assert engine.would_execute(Key.CONFIRM).name == "Reset Sleep"
        assert engine.would_execute(Key.CANCEL) is None

    def test_would_execute_not_revertible(self, engine):
        engine.focus("Small (32px)")
        assert engine.would_execute(Key.REVERT) is None

    def test_last_transition_recorded(self, engine):
        transition = press(engine, Key.DOWN)
        assert engine.last_transition is transition


class TestItemList:
    """Tests for the pick list opened by listing tweaks."""

    @pytest.fixture
    def listing(self, engine, executor):
        executor.respond("brew outdated", "wget (1.21) < 1.24\ngit\nnode\n")
        engine.focus("Outdated Packages")
        return engine

    def test_apply_opens_list(self, listing):
        transition = press(listing, Key.SELECT)
        assert transition.mode is Mode.ITEM_LIST
        assert transition.result is not None
        assert listing.visible_items() == ["wget", "git", "node"]
        assert listing.selected_item == "wget"
        assert "brew upgrade {item}" in transition.message

    def test_move_clamps(self, listing):
        press(listing, Key.SELECT, Key.UP)
        assert listing.cursor.item_index == 0
        press(listing, *[Key.DOWN] * 5)
        assert listing.selected_item == "node"

    def test_select_runs_item_command_and_closes(self, listing, executor):
        transition = press(listing, Key.SELECT, Key.DOWN, Key.SELECT)
        assert executor.calls[-1] == ("brew upgrade git", True)
        assert transition.mode is Mode.DETAIL
        assert transition.outcome.succeeded
        assert transition.message == "Successfully ran: brew upgrade git"
        assert listing.cursor.items == ()

    def test_item_failure_captured(self, listing, executor):
        executor.fail("brew upgrade wget", output="Error: no bottle")
        transition = press(listing, Key.SELECT, Key.SELECT)
        assert isinstance(transition.error, ItemFailedError)
        assert transition.mode is Mode.DETAIL

    def test_back_closes_without_running(self, listing, executor):
        press(listing, Key.SELECT)
        transition = press(listing, Key.BACK)
        assert transition.mode is Mode.DETAIL
        assert listing.selected_item is None
        assert executor.commands == ["brew outdated"]

    def test_lateral_ignored(self, listing):
        press(listing, Key.SELECT, Key.LEFT)
        assert listing.mode is Mode.ITEM_LIST
        assert listing.selected_category.name == "About"

    def test_empty_output_stays_in_detail(self, engine, executor):
        executor.respond("brew outdated", "\n")
        engine.focus("Outdated Packages")
        transition = press(engine, Key.SELECT)
        assert transition.mode is Mode.DETAIL
        assert transition.message == "Nothing to pick from."

    def test_regular_tweak_never_opens_list(self, engine):
        engine.focus("Version")
        assert press(engine, Key.SELECT).mode is Mode.DETAIL

    def test_needs_terminal_for_item_command(self, listing):
        assert not listing.needs_terminal(Key.SELECT)
        press(listing, Key.SELECT)
        assert listing.needs_terminal(Key.SELECT)
        assert not listing.needs_terminal(Key.DOWN)

    def test_focus_item(self, listing):
        press(listing, Key.SELECT)
        listing.focus_item("node")
        assert listing.selected_item == "node"
        with pytest.raises(UnknownItemError):
            listing.focus_item("python")

    def test_focus_item_without_list(self, listing):
        with pytest.raises(UnknownItemError):
            listing.focus_item("wget")
