"""CLI frontend for macOS Tweaks.

Commands:
    macos-tweaks            Open the interactive navigator
    macos-tweaks list       List tweaks by category
    macos-tweaks show       Show one tweak
    macos-tweaks apply      Apply a tweak
    macos-tweaks revert     Revert a tweak
    macos-tweaks pick       Pick a package from a listing tweak

Example:
    $ macos-tweaks list
    $ macos-tweaks apply "Auto-hide Dock"
    $ macos-tweaks revert "Auto-hide Dock"
    $ macos-tweaks pick "List Outdated Packages" wget
"""

from mactweaks.frontends.cli.main import cli, main

__all__ = ["cli", "main"]
