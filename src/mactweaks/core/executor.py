"""Command execution - run one shell command line and report the outcome.

CommandExecutor spawns a fresh subprocess per call and blocks until it
exits. Failures are returned as data in a CommandOutcome, never raised:

- non-zero exit   -> succeeded=False, exit_code set
- killed by signal -> succeeded=False, exit_signal set
- timeout         -> succeeded=False, exit_code None
- shell missing   -> succeeded=False, exit_code None

There is no retry policy. System configuration commands are not
guaranteed safe to repeat, so retrying is left to the caller.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import time
from dataclasses import dataclass
from typing import Protocol

from mactweaks.core.types import CommandOutcome

logger = logging.getLogger(__name__)

DEFAULT_SHELL = "zsh"
FALLBACK_SHELL = "/bin/sh"


class Executor(Protocol):
    """Anything that can run a command line and describe the outcome."""

    def run(self, command_line: str, *, interactive: bool = False) -> CommandOutcome: ...


def resolve_shell(preferred: str | None = None) -> str:
    """Pick the shell used to interpret command lines.

    Order: explicit argument, MACTWEAKS_SHELL, zsh on PATH, /bin/sh.
    """
    candidate = preferred or os.environ.get("MACTWEAKS_SHELL") or DEFAULT_SHELL
    found = shutil.which(candidate)
    if found:
        return found
    logger.debug("shell_not_found: shell=%s, fallback=%s", candidate, FALLBACK_SHELL)
    return FALLBACK_SHELL


def timeout_from_env() -> float | None:
    """Read MACTWEAKS_COMMAND_TIMEOUT (seconds). Invalid or <= 0 means no timeout."""
    raw = os.environ.get("MACTWEAKS_COMMAND_TIMEOUT", "").strip()
    if not raw:
        return None
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Ignoring invalid MACTWEAKS_COMMAND_TIMEOUT=%r", raw)
        return None
    return value if value > 0 else None


@dataclass
class CommandExecutor:
    """Runs command lines through a shell, one at a time.

    Args:
        shell: Shell binary used as ``<shell> -c <command_line>``.
            Defaults to resolve_shell().
        timeout: Optional per-command timeout in seconds. None waits forever.
        cwd: Working directory for commands. None inherits ours.

    Example:
        >>> executor = CommandExecutor(shell="/bin/sh")
        >>> outcome = executor.run("echo hello")
        >>> outcome.succeeded, outcome.captured_output
        (True, 'hello\\n')
        >>> executor.run("exit 3").exit_code
        3
    """

    shell: str | None = None
    timeout: float | None = None
    cwd: str | None = None

    def __post_init__(self) -> None:
        if self.shell is None:
            self.shell = resolve_shell()

    def run(self, command_line: str, *, interactive: bool = False) -> CommandOutcome:
        """Run one command line and wait for it to finish.

        Args:
            command_line: Passed verbatim to the shell.
            interactive: Inherit stdin/stdout/stderr instead of capturing, so
                the command can talk to the user (sudo password prompts).

        Returns:
            CommandOutcome describing what happened. Never raises for
            command failure.
        """
        if not command_line.strip():
            return CommandOutcome(command=command_line, succeeded=False, error="No command provided")

        argv = [str(self.shell), "-c", command_line]
        logger.debug(
            "command_start: shell=%s, interactive=%s, command=%s",
            self.shell,
            interactive,
            command_line,
        )
        start = time.monotonic()

        try:
            if interactive:
                proc = subprocess.run(argv, cwd=self.cwd, timeout=self.timeout, check=False)
                stdout, stderr = "", ""
            else:
                proc = subprocess.run(
                    argv,
                    cwd=self.cwd,
                    timeout=self.timeout,
                    check=False,
                    capture_output=True,
                    text=True,
                    errors="replace",
                )
                stdout, stderr = proc.stdout or "", proc.stderr or ""
        except subprocess.TimeoutExpired:
            duration_ms = (time.monotonic() - start) * 1000
            logger.warning("command_timeout: timeout=%ss, command=%s", self.timeout, command_line)
            return CommandOutcome(
                command=command_line,
                succeeded=False,
                duration_ms=duration_ms,
                error=f"Command timed out after {self.timeout}s",
            )
        except OSError as e:
            duration_ms = (time.monotonic() - start) * 1000
            logger.error("command_spawn_failed: shell=%s, error=%s", self.shell, e)
            return CommandOutcome(
                command=command_line,
                succeeded=False,
                duration_ms=duration_ms,
                error=f"Could not start {self.shell}: {e}",
            )

        duration_ms = (time.monotonic() - start) * 1000
        returncode = proc.returncode

        if returncode == 0:
            logger.debug("command_complete: duration_ms=%.0f, command=%s", duration_ms, command_line)
            return CommandOutcome(
                command=command_line,
                succeeded=True,
                captured_output=stdout,
                exit_code=0,
                duration_ms=duration_ms,
            )

        # subprocess reports death-by-signal as a negative return code
        if returncode < 0:
            exit_signal: int | None = -returncode
            exit_code: int | None = None
            error = f"Command killed by signal {exit_signal}"
        else:
            exit_signal = None
            exit_code = returncode
            error = f"Command exited with code {returncode}"

        logger.info("command_failed: %s, command=%s", error, command_line)
        return CommandOutcome(
            command=command_line,
            succeeded=False,
            captured_output=stderr if stderr.strip() else stdout,
            exit_code=exit_code,
            exit_signal=exit_signal,
            duration_ms=duration_ms,
            error=error,
        )
