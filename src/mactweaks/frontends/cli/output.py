"""Output helpers shared by the CLI commands."""

from __future__ import annotations

import json
import sys
from typing import TYPE_CHECKING, Any, NoReturn

import rich_click as click
from rich.console import Console

from mactweaks.frontends.tui.themes import create_theme

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from mactweaks.config import ColorScheme

COLUMN_GAP = "  "


def make_console(scheme: ColorScheme, stderr: bool = False) -> Console:
    """Rich console themed with the configured colors."""
    return Console(theme=create_theme(scheme), stderr=stderr, highlight=False)


def _column_widths(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> list[int]:
    return [
        max([len(header)] + [len(row[i]) for row in rows if i < len(row)])
        for i, header in enumerate(headers)
    ]


def print_table(
    headers: Sequence[str],
    rows: Sequence[Sequence[str]],
    group_column: int | None = None,
) -> None:
    """Print rows under a header, each column padded to its widest cell.

    Args:
        headers: Column titles.
        rows: Cell values; short rows are padded with empty cells.
        group_column: Index of a column whose repeated values are printed
            once. A blank line separates consecutive groups.
    """
    widths = _column_widths(headers, rows)
    last = len(headers) - 1

    def line(cells: Sequence[str]) -> str:
        padded = list(cells) + [""] * (len(headers) - len(cells))
        parts = [cell if i == last else cell.ljust(widths[i]) for i, cell in enumerate(padded)]
        return COLUMN_GAP.join(parts).rstrip()

    click.echo(line(headers))
    click.echo("-" * (sum(widths) + len(COLUMN_GAP) * last))

    previous: str | None = None
    for row in rows:
        cells = list(row)
        if group_column is not None:
            current = cells[group_column]
            if current == previous:
                cells[group_column] = ""
            elif previous is not None:
                click.echo()
            previous = current
        click.echo(line(cells))


def output_json(data: Any) -> None:
    """Print data as indented JSON."""
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


def output_json_or_table(data: Any, json_flag: bool, table_fn: Callable[[], None]) -> None:
    """JSON when --json was given, otherwise whatever table_fn prints."""
    if json_flag:
        output_json(data)
    else:
        table_fn()


def error_exit(message: str, code: int = 1) -> NoReturn:
    """Print an error to stderr and exit with the given code."""
    click.echo(f"Error: {message}", err=True)
    sys.exit(code)
