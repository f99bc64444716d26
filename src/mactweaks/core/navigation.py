"""Navigation & selection state machine shared by the TUI and the CLI.

The engine owns a NavigationCursor and turns discrete input keys into
mode transitions and controller calls. It knows nothing about rendering,
so both front ends (and tests) drive it directly.

Modes:
    CATEGORY_LIST (initial) -> TWEAK_LIST -> DETAIL -> CONFIRMATION
    DETAIL -> ITEM_LIST after a listing tweak printed at least one item

Keys:
    UP/DOWN      Move within the current list, clamped (no wrap). In DETAIL
                 they pick between the Apply and Revert actions.
    LEFT/RIGHT   Previous/next category. In TWEAK_LIST the tweak index
                 resets to 0. Clamped.
    SELECT       Drill down one level. In DETAIL either opens CONFIRMATION
                 (tweak requires confirmation) or runs the action. In
                 ITEM_LIST runs the item command and closes the list.
    APPLY/REVERT Like SELECT in DETAIL, with the action given explicitly.
    BACK         Up one level. In CONFIRMATION it cancels. In CATEGORY_LIST
                 it requests exit.
    CONFIRM      Only in CONFIRMATION: run the pending action, back to DETAIL.
    CANCEL       Only in CONFIRMATION: drop the pending action, back to DETAIL.
    QUIT         Request exit from any mode.

Keys that mean nothing in the current mode are no-ops. Per-tweak errors
raised by the controller are captured in the returned Transition and
never escape handle().

Example (scripted use, as the CLI does):
    >>> engine = NavigationEngine(registry, controller)
    >>> engine.focus("Auto-hide Dock")
    >>> transition = engine.request(TweakAction.APPLY)
    >>> transition.result.state.is_applied
    True
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from mactweaks.core.controller import TweakController
from mactweaks.core.errors import TweakError, UnknownItemError
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.types import ActionResult, Category, CommandOutcome, Tweak, TweakAction

logger = logging.getLogger(__name__)


class Mode(Enum):
    """Which screen the cursor is on."""

    CATEGORY_LIST = "category_list"
    TWEAK_LIST = "tweak_list"
    DETAIL = "detail"
    CONFIRMATION = "confirmation"
    ITEM_LIST = "item_list"


class Key(Enum):
    """Discrete input events understood by the engine."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    SELECT = "select"
    BACK = "back"
    QUIT = "quit"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    APPLY = "apply"
    REVERT = "revert"


# Order of the actions offered in DETAIL (action_index points into this).
DETAIL_ACTIONS: tuple[TweakAction, ...] = (TweakAction.APPLY, TweakAction.REVERT)


@dataclass
class NavigationCursor:
    """Session-scoped cursor state.

    Attributes:
        category_index: Selected category.
        tweak_index: Selected tweak within that category.
        mode: Current screen.
        action_index: Highlighted entry of DETAIL_ACTIONS while in DETAIL.
        pending_action: Action awaiting confirmation (CONFIRMATION only).
        items: Pick list printed by a listing tweak (ITEM_LIST only).
        item_index: Highlighted entry of items.
    """

    category_index: int = 0
    tweak_index: int = 0
    mode: Mode = Mode.CATEGORY_LIST
    action_index: int = 0
    pending_action: TweakAction | None = None
    items: tuple[str, ...] = ()
    item_index: int = 0


@dataclass(frozen=True)
class Transition:
    """What happened in response to one key.

    Attributes:
        mode: Mode after the transition.
        exit_requested: The user asked to leave the program.
        result: Set when a controller action succeeded.
        outcome: Set when an item command succeeded.
        error: Set when a controller call failed.
        message: Status line text for the front end, if any.
    """

    mode: Mode
    exit_requested: bool = False
    result: ActionResult | None = None
    outcome: CommandOutcome | None = None
    error: TweakError | None = None
    message: str | None = None

    @property
    def dispatched(self) -> bool:
        """True when the controller was called."""
        return self.result is not None or self.outcome is not None or self.error is not None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def output(self) -> str:
        """Captured output of whatever ran, if anything."""
        if self.result is not None:
            return self.result.output.strip()
        if self.outcome is not None:
            return self.outcome.captured_output.strip()
        return ""


def _clamp(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


class NavigationEngine:
    """Cursor + transition function over a TweakRegistry.

    Args:
        registry: Catalog to navigate.
        controller: Runs the actions chosen by the user.
    """

    def __init__(self, registry: TweakRegistry, controller: TweakController) -> None:
        self.registry = registry
        self.controller = controller
        self.cursor = NavigationCursor()
        self.last_transition: Transition | None = None

        self._handlers: dict[Key, Callable[[], Transition]] = {
            Key.UP: lambda: self.move(-1),
            Key.DOWN: lambda: self.move(1),
            Key.LEFT: lambda: self.lateral(-1),
            Key.RIGHT: lambda: self.lateral(1),
            Key.SELECT: self.select,
            Key.BACK: self.back,
            Key.QUIT: self.quit,
            Key.CONFIRM: self.confirm,
            Key.CANCEL: self.cancel,
            Key.APPLY: lambda: self.request(TweakAction.APPLY),
            Key.REVERT: lambda: self.request(TweakAction.REVERT),
        }

    # =========================================================================
    # Views
    # =========================================================================

    @property
    def mode(self) -> Mode:
        return self.cursor.mode

    @property
    def categories(self) -> tuple[Category, ...]:
        return self.registry.categories()

    @property
    def selected_category(self) -> Category | None:
        categories = self.categories
        if not categories:
            return None
        return categories[_clamp(self.cursor.category_index, len(categories))]

    def visible_tweaks(self) -> tuple[Tweak, ...]:
        """Tweaks of the selected category."""
        category = self.selected_category
        return category.tweaks if category else ()

    @property
    def selected_tweak(self) -> Tweak | None:
        """The highlighted tweak. None on the category list."""
        if self.cursor.mode is Mode.CATEGORY_LIST:
            return None
        tweaks = self.visible_tweaks()
        if not tweaks:
            return None
        return tweaks[_clamp(self.cursor.tweak_index, len(tweaks))]

    @property
    def selected_action(self) -> TweakAction:
        return DETAIL_ACTIONS[_clamp(self.cursor.action_index, len(DETAIL_ACTIONS))]

    @property
    def pending_action(self) -> TweakAction | None:
        return self.cursor.pending_action

    @property
    def selected_item(self) -> str | None:
        """The highlighted entry of the pick list. None outside ITEM_LIST."""
        items = self.cursor.items
        if self.cursor.mode is not Mode.ITEM_LIST or not items:
            return None
        return items[_clamp(self.cursor.item_index, len(items))]

    def visible_items(self) -> list[str]:
        """Names listed on the current list screen."""
        if self.cursor.mode is Mode.CATEGORY_LIST:
            return [category.name for category in self.categories]
        if self.cursor.mode is Mode.ITEM_LIST:
            return list(self.cursor.items)
        return [tweak.name for tweak in self.visible_tweaks()]

    # =========================================================================
    # Input
    # =========================================================================

    def handle(self, key: Key) -> Transition:
        """Apply one input key and return what happened."""
        transition = self._handlers[key]()
        self.last_transition = transition
        return transition

    def would_execute(self, key: Key) -> Tweak | None:
        """Which tweak's command a key would run, without changing anything.

        Lets a front end prepare the terminal before an interactive command.
        """
        mode = self.cursor.mode
        tweak = self.selected_tweak
        if tweak is None:
            return None

        if mode is Mode.CONFIRMATION and key in (Key.SELECT, Key.CONFIRM):
            return tweak if self.cursor.pending_action is not None else None

        if mode is Mode.ITEM_LIST:
            return tweak if key is Key.SELECT and self.selected_item is not None else None

        if mode is not Mode.DETAIL:
            return None
        if key is Key.SELECT:
            action = self.selected_action
        elif key is Key.APPLY:
            action = TweakAction.APPLY
        elif key is Key.REVERT:
            action = TweakAction.REVERT
        else:
            return None

        if action is TweakAction.REVERT and not tweak.revertible:
            return None
        if tweak.requires_confirmation:
            return None
        return tweak

    def needs_terminal(self, key: Key) -> bool:
        """Whether the command a key would run must own the terminal."""
        tweak = self.would_execute(key)
        if tweak is None:
            return False
        if self.cursor.mode is Mode.ITEM_LIST:
            return tweak.item_interactive
        return tweak.interactive

    # =========================================================================
    # Transitions
    # =========================================================================

    def _stay(self, message: str | None = None) -> Transition:
        return Transition(mode=self.cursor.mode, message=message)

    def move(self, delta: int) -> Transition:
        """Directional move (previous/next), clamped."""
        cursor = self.cursor
        if cursor.mode is Mode.CATEGORY_LIST:
            cursor.category_index = _clamp(cursor.category_index + delta, len(self.categories))
        elif cursor.mode is Mode.TWEAK_LIST:
            cursor.tweak_index = _clamp(cursor.tweak_index + delta, len(self.visible_tweaks()))
        elif cursor.mode is Mode.DETAIL:
            cursor.action_index = _clamp(cursor.action_index + delta, len(DETAIL_ACTIONS))
        elif cursor.mode is Mode.ITEM_LIST:
            cursor.item_index = _clamp(cursor.item_index + delta, len(cursor.items))
        return self._stay()

    def lateral(self, delta: int) -> Transition:
        """Lateral move to the previous/next category, clamped."""
        cursor = self.cursor
        if cursor.mode is Mode.CATEGORY_LIST:
            cursor.category_index = _clamp(cursor.category_index + delta, len(self.categories))
        elif cursor.mode is Mode.TWEAK_LIST:
            cursor.category_index = _clamp(cursor.category_index + delta, len(self.categories))
            cursor.tweak_index = 0
        return self._stay()

    def select(self) -> Transition:
        """Drill down, open the confirmation, or run the highlighted action."""
        cursor = self.cursor
        if cursor.mode is Mode.CATEGORY_LIST:
            category = self.selected_category
            if category is None or not category.tweaks:
                return self._stay("This category is empty.")
            cursor.category_index = _clamp(cursor.category_index, len(self.categories))
            cursor.tweak_index = 0
            cursor.mode = Mode.TWEAK_LIST
            return self._stay()

        if cursor.mode is Mode.TWEAK_LIST:
            if self.selected_tweak is None:
                return self._stay()
            cursor.tweak_index = _clamp(cursor.tweak_index, len(self.visible_tweaks()))
            cursor.action_index = 0
            cursor.mode = Mode.DETAIL
            return self._stay()

        if cursor.mode is Mode.DETAIL:
            return self.request(self.selected_action)

        if cursor.mode is Mode.ITEM_LIST:
            return self.pick()

        return self.confirm()

    def back(self) -> Transition:
        """Go up one level; from the category list, ask to exit."""
        cursor = self.cursor
        if cursor.mode is Mode.CATEGORY_LIST:
            return Transition(mode=cursor.mode, exit_requested=True)
        if cursor.mode is Mode.TWEAK_LIST:
            cursor.mode = Mode.CATEGORY_LIST
            return self._stay()
        if cursor.mode is Mode.DETAIL:
            cursor.mode = Mode.TWEAK_LIST
            return self._stay()
        if cursor.mode is Mode.ITEM_LIST:
            self._close_items()
            return self._stay()
        return self.cancel()

    def quit(self) -> Transition:
        """Global quit. The cursor is left as it was."""
        return Transition(mode=self.cursor.mode, exit_requested=True)

    def request(self, action: TweakAction) -> Transition:
        """Ask for an action on the tweak shown in DETAIL.

        Opens CONFIRMATION when the tweak requires it. A revert of a tweak
        that cannot be reverted goes straight to the controller, which
        rejects it without running anything.
        """
        cursor = self.cursor
        tweak = self.selected_tweak
        if cursor.mode is not Mode.DETAIL or tweak is None:
            return self._stay()

        cursor.action_index = DETAIL_ACTIONS.index(action)
        needs_confirmation = tweak.requires_confirmation and not (
            action is TweakAction.REVERT and not tweak.revertible
        )
        if needs_confirmation:
            cursor.pending_action = action
            cursor.mode = Mode.CONFIRMATION
            logger.debug("confirmation_opened: tweak=%s, action=%s", tweak.name, action.value)
            return self._stay(f"Confirm {action.value} of '{tweak.name}'?")
        return self._dispatch(tweak, action)

    def confirm(self) -> Transition:
        """Run the pending action and return to DETAIL."""
        cursor = self.cursor
        tweak = self.selected_tweak
        if cursor.mode is not Mode.CONFIRMATION or cursor.pending_action is None or tweak is None:
            return self._stay()
        action = cursor.pending_action
        cursor.pending_action = None
        cursor.mode = Mode.DETAIL
        return self._dispatch(tweak, action)

    def cancel(self) -> Transition:
        """Drop the pending action and return to DETAIL."""
        cursor = self.cursor
        if cursor.mode is not Mode.CONFIRMATION:
            return self._stay()
        cursor.pending_action = None
        cursor.mode = Mode.DETAIL
        return self._stay("Action canceled.")

    def pick(self) -> Transition:
        """Run the item command on the highlighted item and close the list."""
        tweak = self.selected_tweak
        item = self.selected_item
        if tweak is None or item is None:
            return self._stay()

        self._close_items()
        try:
            outcome = self.controller.run_item(tweak.name, item)
        except TweakError as e:
            return Transition(mode=self.cursor.mode, error=e, message=str(e))
        return Transition(
            mode=self.cursor.mode,
            outcome=outcome,
            message=f"Successfully ran: {outcome.command}",
        )

    def focus(self, name: str) -> None:
        """Jump straight to a tweak's DETAIL screen by name.

        Raises:
            UnknownTweakError: No such tweak.
        """
        tweak = self.registry.find(name)
        category = self.registry.category_of(tweak.name)
        category_names = [c.name for c in self.categories]

        cursor = self.cursor
        cursor.category_index = category_names.index(category.name)
        cursor.tweak_index = category.index_of(tweak.name)
        cursor.action_index = 0
        cursor.pending_action = None
        cursor.items = ()
        cursor.item_index = 0
        cursor.mode = Mode.DETAIL

    def focus_item(self, item: str) -> None:
        """Highlight an entry of the open pick list by value.

        Raises:
            UnknownItemError: No list is open or it does not contain item.
        """
        tweak = self.selected_tweak
        cursor = self.cursor
        if cursor.mode is not Mode.ITEM_LIST or item not in cursor.items:
            raise UnknownItemError(tweak.name if tweak else "", item)
        cursor.item_index = cursor.items.index(item)

    def _close_items(self) -> None:
        cursor = self.cursor
        cursor.items = ()
        cursor.item_index = 0
        cursor.mode = Mode.DETAIL

    # =========================================================================
    # Controller dispatch
    # =========================================================================

    def _dispatch(self, tweak: Tweak, action: TweakAction) -> Transition:
        try:
            result = self.controller.run(tweak.name, action)
        except TweakError as e:
            return Transition(mode=self.cursor.mode, error=e, message=str(e))

        if action is TweakAction.APPLY and tweak.lists_items:
            return self._open_items(tweak, result)

        verb = "applied" if action is TweakAction.APPLY else "reverted"
        return Transition(
            mode=self.cursor.mode,
            result=result,
            message=f"Successfully {verb}: {tweak.name}",
        )

    def _open_items(self, tweak: Tweak, result: ActionResult) -> Transition:
        """Turn a listing tweak's output into the pick list."""
        items = tweak.items_from(result.output)
        if not items:
            return Transition(mode=self.cursor.mode, result=result, message="Nothing to pick from.")

        cursor = self.cursor
        cursor.items = items
        cursor.item_index = 0
        cursor.mode = Mode.ITEM_LIST
        logger.debug("item_list_opened: tweak=%s, items=%d", tweak.name, len(items))
        return Transition(
            mode=cursor.mode,
            result=result,
            message=f"{len(items)} listed; pick one to run: {tweak.item_command}",
        )
