"""Full-screen interactive navigator.

Renders the NavigationEngine state and feeds it keys:

    ↑/↓ (j/k)      Move within the list / pick Apply or Revert
    ←/→ (h/l)      Previous / next category
    Enter          Open / run / confirm
    a / r          Apply / revert (detail view)
    y / n          Confirm / cancel (confirmation dialog)
    Esc            Back / cancel
    q, Ctrl-C      Quit

Listing tweaks (installed or outdated Homebrew packages) open a pick list
after they run; Enter runs the per-item command on the highlighted entry.
Commands flagged interactive (sudo prompts, installers) run through
run_in_terminal so they get the real terminal while the UI is suspended.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from prompt_toolkit.application import Application, run_in_terminal
from prompt_toolkit.filters import Condition
from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.key_binding.key_processor import KeyPressEvent
from prompt_toolkit.layout import ConditionalContainer, HSplit, Layout, Window
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.widgets import Frame

from mactweaks.__version__ import __version__
from mactweaks.config import ColorScheme
from mactweaks.core.errors import CommandFailedError
from mactweaks.core.navigation import DETAIL_ACTIONS, Key, Mode, NavigationEngine, Transition
from mactweaks.core.types import Tweak, TweakAction
from mactweaks.frontends.tui.themes import create_style

if TYPE_CHECKING:
    from mactweaks.app import TweaksApp

logger = logging.getLogger(__name__)

# prompt_toolkit key name -> engine key
KEY_MAP: dict[str, Key] = {
    "up": Key.UP,
    "k": Key.UP,
    "down": Key.DOWN,
    "j": Key.DOWN,
    "left": Key.LEFT,
    "h": Key.LEFT,
    "right": Key.RIGHT,
    "l": Key.RIGHT,
    "enter": Key.SELECT,
    "escape": Key.BACK,
    "q": Key.QUIT,
    "c-c": Key.QUIT,
    "a": Key.APPLY,
    "r": Key.REVERT,
    "y": Key.CONFIRM,
    "n": Key.CANCEL,
}

HINTS: dict[Mode, str] = {
    Mode.CATEGORY_LIST: "↑/↓: Navigate  •  Enter: Open  •  Esc/q: Quit",
    Mode.TWEAK_LIST: "↑/↓: Navigate  •  ←/→: Category  •  Enter: Details  •  Esc: Back  •  q: Quit",
    Mode.DETAIL: "↑/↓: Action  •  Enter: Run  •  a: Apply  •  r: Revert  •  Esc: Back  •  q: Quit",
    Mode.CONFIRMATION: "y/Enter: Confirm  •  n/Esc: Cancel",
    Mode.ITEM_LIST: "↑/↓: Navigate  •  Enter: Run  •  Esc: Close  •  q: Quit",
}

SEPARATOR = "─" * 60


@dataclass
class NavigatorApp:
    """Full-screen TUI over a NavigationEngine.

    Attributes:
        engine: Cursor and transition logic.
        scheme: Colors for the prompt_toolkit style.
        status: Status line as (style, text), or None.
        outputs: Last captured output per tweak name.
    """

    engine: NavigationEngine
    scheme: ColorScheme = field(default_factory=ColorScheme)

    status: tuple[str, str] | None = None
    outputs: dict[str, str] = field(default_factory=dict)

    _app: Application[None] | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        self.kb = self._create_key_bindings()
        self.layout = self._create_layout()

    # =========================================================================
    # Input
    # =========================================================================

    def press(self, key: Key) -> Transition:
        """Feed one key to the engine and update the status line."""
        transition = self.engine.handle(key)
        self._absorb(transition)
        return transition

    def _absorb(self, transition: Transition) -> None:
        tweak = self.engine.selected_tweak

        if transition.error is not None:
            self.status = ("class:error", transition.message or str(transition.error))
            if tweak is not None and isinstance(transition.error, CommandFailedError):
                self.outputs[tweak.name] = transition.error.captured_output.strip()
        elif transition.result is not None:
            self.status = ("class:success", transition.message or "")
            self.outputs[transition.result.tweak.name] = transition.result.output.strip()
        elif transition.outcome is not None:
            self.status = ("class:success", transition.message or "")
            if tweak is not None and transition.output:
                self.outputs[tweak.name] = transition.output
        elif transition.message:
            style = "class:warning" if transition.mode is Mode.CONFIRMATION else "class:dim"
            self.status = (style, transition.message)
        elif transition.mode not in (Mode.DETAIL, Mode.CONFIRMATION):
            self.status = None

    def _on_key(self, event: KeyPressEvent, key: Key) -> None:
        if self.engine.needs_terminal(key):
            logger.debug("interactive_command: mode=%s", self.engine.mode.value)
            run_in_terminal(lambda: self._press_and_exit(event, key))
            return
        self._press_and_exit(event, key)

    def _press_and_exit(self, event: KeyPressEvent, key: Key) -> None:
        if self.press(key).exit_requested:
            event.app.exit()

    def _create_key_bindings(self) -> KeyBindings:
        """One binding per entry in KEY_MAP."""
        kb = KeyBindings()

        for name, key in KEY_MAP.items():

            def handler(event: KeyPressEvent, key: Key = key) -> None:
                self._on_key(event, key)

            kb.add(name)(handler)

        return kb

    # =========================================================================
    # Rendering
    # =========================================================================

    def _create_layout(self) -> Layout:
        content = Window(
            content=FormattedTextControl(text=self._get_content, focusable=True),
            wrap_lines=True,
        )
        dialog = ConditionalContainer(
            Frame(
                body=Window(content=FormattedTextControl(text=self._get_dialog), height=3),
                title="Confirm",
            ),
            filter=Condition(lambda: self.engine.mode is Mode.CONFIRMATION),
        )
        status_window = Window(
            content=FormattedTextControl(text=self._get_status_bar),
            height=2,
        )
        root = HSplit(
            [
                Frame(body=content, title=self._get_title),
                dialog,
                status_window,
            ]
        )
        return Layout(root)

    def _get_title(self) -> str:
        tweak = self.engine.selected_tweak
        if self.engine.mode is Mode.ITEM_LIST and tweak is not None:
            return f"macOS Tweaks v{__version__} - {tweak.name}"
        category = self.engine.selected_category
        if self.engine.mode is Mode.CATEGORY_LIST or category is None:
            return f"macOS Tweaks v{__version__}"
        return f"macOS Tweaks v{__version__} - {category.name}"

    def _get_content(self) -> FormattedText:
        mode = self.engine.mode
        if mode is Mode.CATEGORY_LIST:
            return self._render_categories()
        if mode is Mode.TWEAK_LIST:
            return self._render_tweaks()
        if mode is Mode.ITEM_LIST:
            return self._render_item_list()
        return self._render_detail()

    def _is_applied(self, tweak: Tweak) -> bool:
        if tweak.repeatable or tweak.informational:
            return False
        return self.engine.controller.status(tweak.name).is_applied

    def _render_categories(self) -> FormattedText:
        categories = self.engine.categories
        if not categories:
            return FormattedText([("class:dim", "No categories.\n")])

        fragments: list[tuple[str, str]] = [("class:title", "  Categories\n\n")]
        for i, category in enumerate(categories):
            count = f"  ({len(category)})"
            if i == self.engine.cursor.category_index:
                fragments.append(("class:selected", f"  ▸ {category.name}"))
            else:
                fragments.append(("class:tweak", f"    {category.name}"))
            fragments.append(("class:dim", f"{count}\n"))
            if i == self.engine.cursor.category_index and category.description:
                fragments.append(("class:dim", f"      {category.description}\n"))
        return FormattedText(fragments)

    def _render_tweaks(self) -> FormattedText:
        engine = self.engine
        category = engine.selected_category
        if category is None:
            return FormattedText([])

        index = engine.categories.index(category)
        fragments: list[tuple[str, str]] = [
            ("class:hint", "◂ " if index > 0 else "  "),
            ("class:category", category.name),
            ("class:hint", " ▸" if index < len(engine.categories) - 1 else ""),
            ("", "\n"),
        ]
        if category.description:
            fragments.append(("class:dim", f"{category.description}\n"))
        fragments.append(("", "\n"))

        group = ""
        for i, tweak in enumerate(category.tweaks):
            if tweak.group and tweak.group != group:
                group = tweak.group
                fragments.append(("class:group", f"  {group}\n"))
            mark = " ✓" if self._is_applied(tweak) else ""
            if i == engine.cursor.tweak_index:
                fragments.append(("class:selected", f"  ▸ {tweak.name}"))
            else:
                fragments.append(("class:tweak", f"    {tweak.name}"))
            fragments.append(("class:applied", f"{mark}\n"))
        return FormattedText(fragments)

    def _render_detail(self) -> FormattedText:
        engine = self.engine
        tweak = engine.selected_tweak
        if tweak is None:
            return FormattedText([])

        fragments: list[tuple[str, str]] = [
            ("class:title", f"{tweak.name}\n"),
            ("class:text", f"{tweak.description}\n"),
        ]
        if tweak.group:
            fragments.append(("class:group", f"{tweak.group}\n"))
        fragments.append(("class:dim", f"{SEPARATOR}\n"))

        for i, action in enumerate(DETAIL_ACTIONS):
            available = action is TweakAction.APPLY or tweak.revertible
            label = action.label if available else f"{action.label} (not available)"
            if i == engine.cursor.action_index:
                fragments.append(("class:selected", f"  ▸ {label}\n"))
            else:
                fragments.append(("class:tweak" if available else "class:dim", f"    {label}\n"))

        fragments.append(("", "\n"))
        if tweak.requires_confirmation:
            fragments.append(("class:warning", "Requires confirmation\n"))
        if tweak.interactive:
            fragments.append(("class:dim", "Runs in the terminal (may ask for your password)\n"))
        if not (tweak.repeatable or tweak.informational):
            applied = self._is_applied(tweak)
            fragments.append(("class:dim", "Status: "))
            fragments.append(
                ("class:applied", "applied\n") if applied else ("class:dim", "not applied\n")
            )

        output = self.outputs.get(tweak.name)
        if output:
            fragments.append(("class:dim", f"{SEPARATOR}\n"))
            fragments.append(("class:text", f"{output}\n"))
        return FormattedText(fragments)

    def _render_item_list(self) -> FormattedText:
        engine = self.engine
        tweak = engine.selected_tweak
        if tweak is None:
            return FormattedText([])

        fragments: list[tuple[str, str]] = [
            ("class:title", f"{tweak.name}\n"),
            ("class:hint", f"Enter runs: {tweak.item_command}\n"),
            ("class:dim", f"{SEPARATOR}\n"),
        ]
        for i, item in enumerate(engine.cursor.items):
            if i == engine.cursor.item_index:
                # Keeps the highlighted row scrolled into view.
                fragments.append(("[SetCursorPosition]", ""))
                fragments.append(("class:selected", f"  ▸ {item}\n"))
            else:
                fragments.append(("class:tweak", f"    {item}\n"))
        return FormattedText(fragments)

    def _get_dialog(self) -> FormattedText:
        tweak = self.engine.selected_tweak
        action = self.engine.pending_action
        if tweak is None or action is None:
            return FormattedText([])
        return FormattedText(
            [
                ("class:dialog.title", f"{action.label} '{tweak.name}'?\n"),
                ("class:dialog", f"{tweak.description}\n"),
                ("class:hint", "y: Yes  •  n: No"),
            ]
        )

    def _get_status_bar(self) -> FormattedText:
        fragments: list[tuple[str, str]] = []
        if self.status is not None:
            fragments.append(self.status)
        fragments.append(("", "\n"))
        fragments.append(("class:hint", HINTS[self.engine.mode]))
        return FormattedText(fragments)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def run(self) -> None:
        """Run the navigator until the user quits."""
        self._app = Application(
            layout=self.layout,
            key_bindings=self.kb,
            style=create_style(self.scheme),
            full_screen=True,
        )
        logger.info("navigator_started")
        self._app.run()
        logger.info("navigator_stopped")


def run_navigator(app: TweaksApp) -> None:
    """Open the navigator on a wired app.

    Args:
        app: Result of mactweaks.app.build_app().
    """
    NavigatorApp(engine=app.navigator(), scheme=app.config.color_scheme).run()
