"""Pytest configuration and fixtures."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import pytest

from mactweaks.app import TweaksApp, build_app
from mactweaks.core import logging_config
from mactweaks.core.controller import TweakController
from mactweaks.core.navigation import NavigationEngine
from mactweaks.core.registry import TweakRegistry
from mactweaks.core.types import Category, CommandOutcome, Tweak

AUTOHIDE_ON = "defaults write com.apple.dock autohide -bool true && killall Dock"
AUTOHIDE_OFF = "defaults write com.apple.dock autohide -bool false && killall Dock"
OUTDATED = "brew outdated"


@dataclass
class RecordingExecutor:
    """Executor stub that records every call instead of spawning processes.

    Commands succeed with empty output unless configured with fail() or
    respond().
    """

    calls: list[tuple[str, bool]] = field(default_factory=list)
    failures: dict[str, CommandOutcome] = field(default_factory=dict)
    responses: dict[str, str] = field(default_factory=dict)

    def fail(self, command: str, output: str = "", exit_code: int = 1) -> None:
        self.failures[command] = CommandOutcome(
            command=command,
            succeeded=False,
            captured_output=output,
            exit_code=exit_code,
            error=f"Command exited with code {exit_code}",
        )

    def respond(self, command: str, output: str) -> None:
        self.responses[command] = output

    @property
    def commands(self) -> list[str]:
        return [command for command, _ in self.calls]

    def run(self, command_line: str, *, interactive: bool = False) -> CommandOutcome:
        self.calls.append((command_line, interactive))
        if command_line in self.failures:
            return self.failures[command_line]
        return CommandOutcome(
            command=command_line,
            succeeded=True,
            captured_output=self.responses.get(command_line, ""),
            exit_code=0,
        )


def sample_categories() -> tuple[Category, ...]:
    """Three small categories covering every kind of tweak."""
    return (
        Category(
            name="Dock",
            description="Dock settings",
            tweaks=(
                Tweak(
                    "Auto-hide Dock",
                    "Hide the Dock until the pointer reaches it",
                    AUTOHIDE_ON,
                    AUTOHIDE_OFF,
                ),
                Tweak(
                    "Small (32px)",
                    "Set Dock icon size to 32px",
                    "defaults write com.apple.dock tilesize -int 32 && killall Dock",
                    group="Size",
                ),
            ),
        ),
        Category(
            name="Maintenance",
            tweaks=(
                Tweak(
                    "Clear Caches",
                    "Delete user cache files",
                    "rm -rf ~/Library/Caches/*",
                    requires_confirmation=True,
                ),
                Tweak(
                    "Reset Sleep",
                    "Restore default sleep timers",
                    "sudo systemsetup -setcomputersleep 15",
                    "sudo systemsetup -setcomputersleep Never",
                    requires_confirmation=True,
                    interactive=True,
                ),
            ),
        ),
        Category(
            name="About",
            tweaks=(
                Tweak(
                    "Version",
                    "Show the version",
                    "echo 'macOS Tweaks v0.3.0'",
                    informational=True,
                    repeatable=True,
                ),
                Tweak(
                    "Outdated Packages",
                    "Pick an outdated package to upgrade",
                    OUTDATED,
                    informational=True,
                    repeatable=True,
                    item_command="brew upgrade {item}",
                    item_interactive=True,
                ),
            ),
        ),
    )


@pytest.fixture
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture
def registry() -> TweakRegistry:
    return TweakRegistry.build(sample_categories())


@pytest.fixture
def controller(registry: TweakRegistry, executor: RecordingExecutor) -> TweakController:
    return TweakController(registry, executor)


@pytest.fixture
def engine(registry: TweakRegistry, controller: TweakController) -> NavigationEngine:
    return NavigationEngine(registry, controller)


@pytest.fixture
def app(executor: RecordingExecutor) -> TweaksApp:
    return build_app(categories=sample_categories(), executor=executor)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir so tests never touch ~/.config."""
    monkeypatch.setenv("MACTWEAKS_CONFIG", str(tmp_path / "config.json"))


@pytest.fixture(autouse=True)
def restore_root_logger():
    """configure_logging() rewires the root logger; put it back afterwards."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
    logging_config._configured = False
