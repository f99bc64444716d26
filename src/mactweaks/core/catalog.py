"""The built-in tweak catalog.

Pure data: a tuple of Category records, each holding Tweak records in
display order. TweakRegistry.build() validates it in one pass.

Conventions:
    - Names are unique across the whole catalog, not just per category.
      Leaf names that would repeat ("Never" under both sleep headings)
      carry their group as a prefix.
    - group is a display-only sub-heading.
    - Commands that prompt for a sudo password or run installers are
      interactive so they get the real terminal.
    - Anything that deletes user data requires confirmation.
    - Listing tweaks print one package per line; item_command runs on the
      entry the user picks.
"""

from __future__ import annotations

import shlex
from pathlib import Path

from mactweaks.__version__ import __version__
from mactweaks.core.types import Category, Tweak

RESOURCES_DIR = Path(__file__).resolve().parent.parent / "resources"
ORGANIZE_PROJECTS_SCRIPT = RESOURCES_DIR / "organize_projects.sh"

_KILL_DOCK = " && killall Dock"


def _dock(key: str, value: str) -> str:
    return f"defaults write com.apple.dock {key} {value}{_KILL_DOCK}"


def _sleep(kind: str, value: str) -> str:
    return f"sudo systemsetup -set{kind}sleep {value}"


def _move_from_desktop(patterns: list[str], destination: str) -> str:
    names = " -o ".join(f"-iname '*.{ext}'" for ext in patterns)
    return (
        f"find ~/Desktop -maxdepth 1 -type f \\( {names} \\) "
        f"-exec mv -n {{}} {destination}/ \\;"
    )


BREW_INSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh"
BREW_UNINSTALL_URL = "https://raw.githubusercontent.com/Homebrew/install/HEAD/uninstall.sh"

ABOUT_TEXT = (
    "macOS Tweaks - a terminal tool for managing macOS system tweaks and optimizations.\n\n"
    "Features:\n"
    "- Categorized catalog of tweaks\n"
    "- Keyboard navigation\n"
    "- Apply / revert from the navigator or the command line\n"
    "- Customizable color schemes\n\n"
    "License: MIT"
)

DEPENDENCIES_TEXT = (
    "Dependencies:\n"
    "- Python 3.10+\n"
    "- prompt_toolkit (full-screen navigator)\n"
    "- rich / rich-click (command line output)"
)


DOCK = Category(
    name="Dock",
    description="Customize macOS Dock settings",
    tweaks=(
        Tweak(
            "Small (32px)",
            "Set Dock icon size to small",
            _dock("tilesize", "-int 32"),
            f"defaults delete com.apple.dock tilesize{_KILL_DOCK}",
            group="Dock Size",
        ),
        Tweak(
            "Medium (48px)",
            "Set Dock icon size to medium",
            _dock("tilesize", "-int 48"),
            f"defaults delete com.apple.dock tilesize{_KILL_DOCK}",
            group="Dock Size",
        ),
        Tweak(
            "Large (64px)",
            "Set Dock icon size to large",
            _dock("tilesize", "-int 64"),
            f"defaults delete com.apple.dock tilesize{_KILL_DOCK}",
            group="Dock Size",
        ),
        Tweak(
            "Disable Magnification",
            "Disable dock magnification effect",
            _dock("magnification", "-bool false"),
            _dock("magnification", "-bool true"),
            group="Dock Behavior",
        ),
        Tweak(
            "Auto-hide Dock",
            "Auto-hide the dock",
            _dock("autohide", "-bool true"),
            _dock("autohide", "-bool false"),
            group="Dock Behavior",
        ),
        Tweak(
            "Add Small Spacer",
            "Add a small spacer tile to the Dock",
            _dock("persistent-apps", "-array-add '{\"tile-type\"=\"small-spacer-tile\";}'"),
            group="Dock Spacers",
            repeatable=True,
        ),
        Tweak(
            "Remove All Spacers",
            "Remove all small spacers from the Dock",
            _dock("persistent-apps", "-array '()'"),
            group="Dock Spacers",
            requires_confirmation=True,
        ),
        Tweak(
            "Reset Dock to Default",
            "Reset Dock to its default settings",
            f"defaults delete com.apple.dock{_KILL_DOCK}",
            group="Reset Options",
            requires_confirmation=True,
        ),
    ),
)

ANIMATED_WALLPAPERS = Category(
    name="Animated Wallpapers",
    description="Enable animated wallpapers",
    tweaks=(
        Tweak(
            "Play video as wallpaper (experimental)",
            "Play ~/Movies/wallpaper.mp4 as wallpaper (requires mpv)",
            "nohup mpv --wid=$(osascript -e 'tell application \"Finder\" to get id of window 1') "
            "--loop --no-border --geometry=100%:100% --panscan=1.0 --no-osc "
            "--no-input-default-bindings --no-audio ~/Movies/wallpaper.mp4 "
            ">/dev/null 2>&1 &",
            "pkill -f 'mpv --wid'",
            group="Video Wallpaper (mpv)",
        ),
    ),
)

POWER_MANAGEMENT = Category(
    name="Power Management",
    description="Configure sleep and power settings",
    tweaks=(
        Tweak(
            "Computer Sleep: Never",
            "Prevent computer from sleeping",
            _sleep("computer", "Never"),
            _sleep("computer", "15"),
            group="Computer Sleep",
            interactive=True,
        ),
        Tweak(
            "Computer Sleep: 15 minutes (Default)",
            "Set computer sleep timer to 15 minutes",
            _sleep("computer", "15"),
            group="Computer Sleep",
            interactive=True,
        ),
        Tweak(
            "Computer Sleep: 30 minutes",
            "Set computer sleep timer to 30 minutes",
            _sleep("computer", "30"),
            _sleep("computer", "15"),
            group="Computer Sleep",
            interactive=True,
        ),
        Tweak(
            "Computer Sleep: 1 hour",
            "Set computer sleep timer to 60 minutes",
            _sleep("computer", "60"),
            _sleep("computer", "15"),
            group="Computer Sleep",
            interactive=True,
        ),
        Tweak(
            "Display Sleep: 5 minutes",
            "Set display sleep timer to 5 minutes",
            _sleep("display", "5"),
            _sleep("display", "10"),
            group="Display Sleep",
            interactive=True,
        ),
        Tweak(
            "Display Sleep: 10 minutes (Default)",
            "Set display sleep timer to 10 minutes",
            _sleep("display", "10"),
            group="Display Sleep",
            interactive=True,
        ),
        Tweak(
            "Display Sleep: 15 minutes",
            "Set display sleep timer to 15 minutes",
            _sleep("display", "15"),
            _sleep("display", "10"),
            group="Display Sleep",
            interactive=True,
        ),
        Tweak(
            "Display Sleep: Never",
            "Prevent display from sleeping",
            _sleep("display", "Never"),
            _sleep("display", "10"),
            group="Display Sleep",
            interactive=True,
        ),
    ),
)

NETWORKING = Category(
    name="Networking",
    description="Configure network settings",
    tweaks=(
        Tweak(
            "Flush DNS Cache",
            "Removes all entries from the DNS cache",
            "sudo dscacheutil -flushcache; sudo killall -HUP mDNSResponder",
            interactive=True,
            repeatable=True,
        ),
    ),
)

OPTIMIZATION = Category(
    name="Optimization",
    description="Apply system performance tweaks",
    tweaks=(
        Tweak(
            "Clear User Cache (destructive)",
            "Removes all files from ~/Library/Caches",
            "rm -rf ~/Library/Caches/*",
            group="Clean Up Caches",
            requires_confirmation=True,
            repeatable=True,
        ),
        Tweak(
            "Clear System Cache (destructive)",
            "Removes all files from /Library/Caches",
            "sudo rm -rf /Library/Caches/*",
            group="Clean Up Caches",
            requires_confirmation=True,
            interactive=True,
            repeatable=True,
        ),
        Tweak(
            "Move screenshots to Pictures folder",
            "Finds all screenshots on Desktop and moves them to ~/Pictures/Screenshots",
            "mkdir -p ~/Pictures/Screenshots && find ~/Desktop -maxdepth 1 "
            "\\( -name 'Screen Shot*.png' -o -name 'Screenshot*.png' \\) "
            "-exec mv -n {} ~/Pictures/Screenshots/ \\;",
            group="Organize Desktop",
            repeatable=True,
        ),
        Tweak(
            "Move project folders to ~/Developer",
            "Moves folders with .git, .gitignore, or source code",
            f"zsh {shlex.quote(str(ORGANIZE_PROJECTS_SCRIPT))}",
            group="Organize Desktop",
            informational=True,
            repeatable=True,
        ),
        Tweak(
            "Move images to ~/Pictures",
            "Moves common image files from Desktop to Pictures",
            _move_from_desktop(["png", "jpg", "jpeg", "gif"], "~/Pictures"),
            group="Organize Desktop",
            repeatable=True,
        ),
        Tweak(
            "Move videos to ~/Movies",
            "Moves common video files from Desktop to Movies",
            _move_from_desktop(["mov", "mp4"], "~/Movies"),
            group="Organize Desktop",
            repeatable=True,
        ),
        Tweak(
            "Move documents to ~/Documents",
            "Moves common document files from Desktop to Documents",
            _move_from_desktop(["pdf", "docx"], "~/Documents"),
            group="Organize Desktop",
            repeatable=True,
        ),
        Tweak(
            "List 10 largest files in Home",
            "Shows a list of the 10 biggest files in your home directory.",
            "echo 'Large files in home directory:' && ls -lah ~ | grep -v '^d' | sort -k5 -hr | head -n 10",
            group="Find Large Files",
            informational=True,
            repeatable=True,
        ),
    ),
)

BREW_MANAGEMENT = Category(
    name="Brew Management",
    description="Manage Homebrew package manager",
    tweaks=(
        Tweak(
            "Install Homebrew (interactive)",
            "Install Homebrew package manager",
            f'/bin/bash -c "$(curl -fsSL {BREW_INSTALL_URL})"',
            group="Brew Installation",
            interactive=True,
        ),
        Tweak(
            "Uninstall Homebrew (destructive)",
            "Remove Homebrew and all packages (destructive)",
            f'/bin/bash -c "$(curl -fsSL {BREW_UNINSTALL_URL})"',
            group="Brew Installation",
            requires_confirmation=True,
            interactive=True,
        ),
        Tweak(
            "Check Homebrew Status",
            "Check if Homebrew is installed and working",
            "if command -v brew >/dev/null 2>&1; "
            "then echo 'Homebrew is installed and available in your PATH.'; "
            "else echo 'Homebrew is not installed or not in your PATH.'; fi",
            group="Brew Installation",
            informational=True,
            repeatable=True,
        ),
        Tweak(
            "Update Homebrew",
            "Update Homebrew and all packages",
            "brew update && brew upgrade",
            group="Brew Maintenance",
            repeatable=True,
        ),
        Tweak(
            "Clean Up Homebrew",
            "Remove old versions and clean cache",
            "brew cleanup",
            group="Brew Maintenance",
            repeatable=True,
        ),
        Tweak(
            "List Installed Packages",
            "View installed Homebrew packages and pick one for details",
            "brew list",
            group="Brew Maintenance",
            informational=True,
            repeatable=True,
            item_command="brew info {item}",
        ),
        Tweak(
            "List Outdated Packages",
            "View packages that have updates available and pick one to upgrade",
            "brew outdated",
            group="Brew Maintenance",
            informational=True,
            repeatable=True,
            item_command="brew upgrade {item}",
            item_interactive=True,
        ),
        Tweak(
            "Disable Analytics",
            "Disable Homebrew analytics collection",
            "brew analytics off",
            "brew analytics on",
            group="Brew Analytics",
        ),
        Tweak(
            "Enable Analytics",
            "Enable Homebrew analytics collection",
            "brew analytics on",
            "brew analytics off",
            group="Brew Analytics",
        ),
        Tweak(
            "Show Analytics Status",
            "Check if analytics are enabled",
            "brew analytics state",
            group="Brew Analytics",
            informational=True,
            repeatable=True,
        ),
    ),
)

ABOUT = Category(
    name="About",
    description="Application information and system details",
    tweaks=(
        Tweak(
            "Version",
            "Show application version",
            f"echo {shlex.quote(f'macOS Tweaks v{__version__}')}",
            group="Application Info",
            informational=True,
            repeatable=True,
        ),
        Tweak(
            "About",
            "Show detailed information about the application",
            f"printf '%s\\n' {shlex.quote(ABOUT_TEXT)}",
            group="Application Info",
            informational=True,
            repeatable=True,
        ),
        Tweak(
            "System Information",
            "Show system information",
            "sw_vers && echo '---' && system_profiler SPHardwareDataType "
            "| grep -E '(Model Name|Model Identifier|Processor|Memory|Serial Number)'",
            group="Application Info",
            informational=True,
            repeatable=True,
        ),
        Tweak(
            "Dependencies",
            "Show application dependencies",
            f"printf '%s\\n' {shlex.quote(DEPENDENCIES_TEXT)}",
            group="Application Info",
            informational=True,
            repeatable=True,
        ),
    ),
)

CATALOG: tuple[Category, ...] = (
    DOCK,
    ANIMATED_WALLPAPERS,
    POWER_MANAGEMENT,
    NETWORKING,
    OPTIMIZATION,
    BREW_MANAGEMENT,
    ABOUT,
)
