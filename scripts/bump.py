#!/usr/bin/env python3
"""Bump the macos-tweaks version, reinstall, and show the result.

Usage:
    uv run scripts/bump.py [patch|minor|major] [--no-install]
"""

import subprocess
import sys

BUMP_TYPES = ("patch", "minor", "major")


def _run(cmd: list[str]) -> str:
    """Run a command, exiting with its stderr on failure."""
    result = subprocess.run(cmd, capture_output=True, text=True)
    if result.returncode != 0:
        print(f"{' '.join(cmd)} failed:")
        print(result.stderr.strip())
        sys.exit(1)
    return result.stdout.strip()


def main():
    args = sys.argv[1:]
    install = "--no-install" not in args
    args = [a for a in args if a != "--no-install"]

    if len(args) != 1 or args[0] not in BUMP_TYPES:
        print("Usage: uv run scripts/bump.py [patch|minor|major] [--no-install]")
        sys.exit(1)

    old = _run(["hatch", "version"])
    _run(["hatch", "version", args[0]])
    new = _run(["hatch", "version"])
    print(f"Version: {old} -> {new}")

    if not install:
        return

    print("Reinstalling package...")
    _run(["uv", "pip", "install", "-e", "."])
    print(_run(["uv", "run", "macos-tweaks", "--version"]))


if __name__ == "__main__":
    main()
