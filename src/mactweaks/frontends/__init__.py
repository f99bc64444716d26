"""Frontends - User interfaces for macOS Tweaks.

Both frontends drive the same core objects built by mactweaks.app:
- CLI: scriptable commands (list, show, apply, revert)
- TUI: full-screen interactive navigator

Submodules:
    cli/    Command-line interface
    tui/    Interactive navigator
"""
