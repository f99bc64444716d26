"""Error types for tweak lookup, execution and catalog integrity.

Per-tweak errors (TweakError subclasses) are recoverable: front ends
catch them and render a message. CatalogError means the static catalog
itself is broken and is only raised while building the registry.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from mactweaks.core.types import CommandOutcome


class TweakError(Exception):
    """Base error for operations on a single tweak."""

    def __init__(self, message: str, tweak_name: str = "") -> None:
        super().__init__(message)
        self.tweak_name = tweak_name


class UnknownTweakError(TweakError):
    """No tweak with the given name exists in the registry."""

    def __init__(self, tweak_name: str) -> None:
        super().__init__(f"Tweak not found: '{tweak_name}'", tweak_name)


class NotRevertibleError(TweakError):
    """Revert was requested on a tweak with no revert command."""

    def __init__(self, tweak_name: str) -> None:
        super().__init__(f"Revert command not available for tweak: '{tweak_name}'", tweak_name)


class CommandFailedError(TweakError):
    """The underlying command ran and reported failure.

    Attributes:
        outcome: The executor outcome, including captured output.
    """

    verb = "run"

    def __init__(self, tweak_name: str, outcome: CommandOutcome, message: str = "") -> None:
        message = message or f"Failed to {self.verb} '{tweak_name}': {outcome.message}"
        super().__init__(message, tweak_name)
        self.outcome = outcome

    @property
    def captured_output(self) -> str:
        return self.outcome.captured_output


class ApplyFailedError(CommandFailedError):
    """The apply command failed."""

    verb = "apply"


class RevertFailedError(CommandFailedError):
    """The revert command failed."""

    verb = "revert"


class ItemFailedError(CommandFailedError):
    """The item command of a listing tweak failed."""

    def __init__(self, tweak_name: str, outcome: CommandOutcome) -> None:
        super().__init__(tweak_name, outcome, f"Failed to run '{outcome.command}': {outcome.message}")


class NotListableError(TweakError):
    """An item command was requested on a tweak whose output is not a pick list."""

    def __init__(self, tweak_name: str) -> None:
        super().__init__(f"Tweak does not list items: '{tweak_name}'", tweak_name)


class UnknownItemError(TweakError):
    """The item is not among those the tweak listed."""

    def __init__(self, tweak_name: str, item: str) -> None:
        super().__init__(f"'{item}' is not listed by '{tweak_name}'", tweak_name)
        self.item = item


class CatalogError(Exception):
    """The static tweak catalog violates an integrity rule.

    Raised only at startup. Indicates a defect in the catalog definition,
    not a user error.
    """


class DuplicateNameError(CatalogError):
    """Two tweaks (or two categories) share a name."""

    def __init__(self, name: str, kind: str = "tweak") -> None:
        super().__init__(f"Duplicate {kind} name in catalog: '{name}'")
        self.name = name
        self.kind = kind
