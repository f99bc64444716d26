"""Pure data types for mactweaks.core.

These are simple dataclasses with no behavior coupling. Tweaks and
categories are frozen value records; the catalog is built from them
and never mutated afterwards.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

ITEM_PLACEHOLDER = "{item}"


class ActionKind(Enum):
    """Which action last completed successfully on a tweak."""

    NONE = "none"
    APPLIED = "applied"
    REVERTED = "reverted"


class TweakAction(Enum):
    """Actions a front end can request on a tweak."""

    APPLY = "apply"
    REVERT = "revert"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def completed_kind(self) -> ActionKind:
        """The ActionKind recorded when this action succeeds."""
        return ActionKind.APPLIED if self is TweakAction.APPLY else ActionKind.REVERTED


@dataclass(frozen=True)
class Tweak:
    """A single configuration change that can be applied and maybe reverted.

    Attributes:
        name: Unique name across the whole catalog (case-sensitive).
        description: One-line explanation shown to the user.
        apply_command: Shell command line that applies the tweak. Required.
        revert_command: Shell command line that undoes it. Empty means the
            tweak cannot be reverted.
        requires_confirmation: Front ends must confirm before running it.
        group: Optional sub-heading inside the owning category.
        interactive: Command needs the real terminal (sudo prompts, installers).
        informational: Command only reports information worth displaying.
        repeatable: Running it again is meaningful, so it is never shown
            as "applied".
        item_command: Command run on one line of the apply output, with
            "{item}" replaced by the shell-quoted item. Empty means the
            output is not a pick list.
        item_interactive: The item command needs the real terminal.
    """

    name: str
    description: str
    apply_command: str
    revert_command: str = ""
    requires_confirmation: bool = False
    group: str = ""
    interactive: bool = False
    informational: bool = False
    repeatable: bool = False
    item_command: str = ""
    item_interactive: bool = False

    def __post_init__(self) -> None:
        from mactweaks.core.errors import CatalogError

        if not self.name or not self.name.strip():
            raise CatalogError("Tweak name is required")
        if not self.apply_command.strip():
            raise CatalogError(f"Tweak '{self.name}' has no apply command")
        if self.item_command and ITEM_PLACEHOLDER not in self.item_command:
            raise CatalogError(f"Tweak '{self.name}' item command lacks {ITEM_PLACEHOLDER}")

    @property
    def revertible(self) -> bool:
        return bool(self.revert_command.strip())

    def command_for(self, action: TweakAction) -> str:
        """Get the command line that performs an action."""
        return self.apply_command if action is TweakAction.APPLY else self.revert_command

    @property
    def lists_items(self) -> bool:
        return bool(self.item_command.strip())

    def items_from(self, output: str) -> tuple[str, ...]:
        """Items in the apply command's output: the first word of each non-blank line."""
        return tuple(line.split()[0] for line in output.splitlines() if line.strip())

    def command_for_item(self, item: str) -> str:
        """The item command line for one item."""
        return self.item_command.replace(ITEM_PLACEHOLDER, shlex.quote(item))

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "name": self.name,
            "description": self.description,
            "group": self.group,
            "apply_command": self.apply_command,
            "revert_command": self.revert_command,
            "requires_confirmation": self.requires_confirmation,
            "interactive": self.interactive,
            "informational": self.informational,
            "repeatable": self.repeatable,
            "item_command": self.item_command,
        }


@dataclass(frozen=True)
class Category:
    """An ordered group of tweaks. Tweak order is display order."""

    name: str
    description: str = ""
    tweaks: tuple[Tweak, ...] = ()

    def __len__(self) -> int:
        return len(self.tweaks)

    def index_of(self, name: str) -> int:
        """Position of a tweak in this category.

        Raises:
            ValueError: If no tweak with that name belongs here.
        """
        for i, tweak in enumerate(self.tweaks):
            if tweak.name == name:
                return i
        raise ValueError(f"Tweak '{name}' is not in category '{self.name}'")


@dataclass(frozen=True)
class CommandOutcome:
    """Result of running one command line.

    A failed command is data, not an exception: succeeded is False and
    error says why (non-zero exit, signal, timeout, missing shell).

    Attributes:
        command: The command line that was run.
        succeeded: True when the process exited with code 0.
        captured_output: stdout on success, stderr (or stdout) on failure.
            Always empty for interactive runs.
        exit_code: Process exit code, None if it never started or timed out.
        exit_signal: Signal number that killed the process, if any.
        duration_ms: Wall-clock duration.
        error: Human-readable failure reason, None on success.
    """

    command: str
    succeeded: bool
    captured_output: str = ""
    exit_code: int | None = None
    exit_signal: int | None = None
    duration_ms: float = 0.0
    error: str | None = None

    @property
    def message(self) -> str:
        """Best single-line-ish description for display."""
        output = self.captured_output.strip()
        if self.succeeded:
            return output
        if output and self.error:
            return f"{self.error}: {output}"
        return output or self.error or "Command failed"

    def to_dict(self) -> dict[str, Any]:
        return {
            "command": self.command,
            "succeeded": self.succeeded,
            "captured_output": self.captured_output,
            "exit_code": self.exit_code,
            "exit_signal": self.exit_signal,
            "duration_ms": self.duration_ms,
            "error": self.error,
        }


@dataclass(frozen=True)
class ActionOutcome:
    """Success/failure of the last action run on a tweak."""

    succeeded: bool
    message: str | None = None


@dataclass
class ApplicationState:
    """Per-tweak application state, owned by the StateTracker.

    is_applied is best effort: it reflects the last command's exit code,
    not a check of the real system setting.
    """

    is_applied: bool = False
    last_result: ActionOutcome | None = None
    last_action_kind: ActionKind = ActionKind.NONE

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_applied": self.is_applied,
            "last_action_kind": self.last_action_kind.value,
            "last_result": (
                None
                if self.last_result is None
                else {
                    "succeeded": self.last_result.succeeded,
                    "message": self.last_result.message,
                }
            ),
        }


@dataclass(frozen=True)
class ActionResult:
    """Successful apply/revert reported back to a front end."""

    tweak: Tweak
    action: TweakAction
    outcome: CommandOutcome
    state: ApplicationState = field(default_factory=ApplicationState)

    @property
    def output(self) -> str:
        return self.outcome.captured_output
