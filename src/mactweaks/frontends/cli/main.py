"""CLI entry point.

Exit codes:
    0  success
    1  tweak error (unknown name, not revertible, command failed) or cancelled
    2  usage error
    3  the tweak catalog failed validation
"""

from __future__ import annotations

import logging

import rich_click as click
from rich.markup import escape

from mactweaks.__version__ import __version__
from mactweaks.app import TweaksApp, build_app
from mactweaks.config import load_config
from mactweaks.core.errors import CatalogError, NotListableError, UnknownItemError, UnknownTweakError
from mactweaks.core.logging_config import configure_logging
from mactweaks.core.navigation import Key, Mode, NavigationEngine, Transition
from mactweaks.core.types import Tweak, TweakAction
from mactweaks.frontends.cli.output import (
    error_exit,
    make_console,
    output_json,
    output_json_or_table,
    print_table,
)

logger = logging.getLogger(__name__)

EXIT_TWEAK_ERROR = 1
EXIT_CATALOG_ERROR = 3

# Configure rich-click styling
click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.ERRORS_EPILOGUE = ""
click.rich_click.MAX_WIDTH = 100


def _resolve(app: TweaksApp, name: str) -> Tweak:
    """Look up a tweak or exit with close-match suggestions."""
    try:
        return app.registry.find(name)
    except UnknownTweakError as e:
        message = str(e)
        suggestions = app.registry.suggest(name)
        if suggestions:
            message += "\nDid you mean: " + ", ".join(f"'{s}'" for s in suggestions) + "?"
        error_exit(message, EXIT_TWEAK_ERROR)


def _flags(tweak: Tweak) -> str:
    flags = []
    if tweak.revertible:
        flags.append("revertible")
    if tweak.requires_confirmation:
        flags.append("confirm")
    if tweak.interactive:
        flags.append("interactive")
    if tweak.informational:
        flags.append("info")
    if tweak.lists_items:
        flags.append("pick list")
    return ", ".join(flags)


def _report(app: TweaksApp, transition: Transition) -> None:
    """Print an action's outcome, exiting non-zero on error."""
    if transition.error is not None:
        error_exit(str(transition.error), EXIT_TWEAK_ERROR)

    if transition.output:
        click.echo(transition.output)
    if transition.message:
        make_console(app.config.color_scheme).print(transition.message, style="success", markup=False)


def _start(
    app: TweaksApp, tweak: Tweak, action: TweakAction, yes: bool
) -> tuple[NavigationEngine, Transition]:
    """Drive the navigation engine the way the navigator would."""
    engine = app.navigator()
    engine.focus(tweak.name)

    transition = engine.request(action)
    if transition.mode is Mode.CONFIRMATION:
        prompt = f"{action.label} '{tweak.name}'? {tweak.description}"
        if not yes and not click.confirm(prompt, default=False):
            engine.handle(Key.CANCEL)
            logger.info("action_cancelled: action=%s, tweak=%s", action.value, tweak.name)
            error_exit("Cancelled", EXIT_TWEAK_ERROR)
        transition = engine.handle(Key.CONFIRM)
    return engine, transition


def _run_action(app: TweaksApp, name: str, action: TweakAction, yes: bool) -> None:
    _, transition = _start(app, _resolve(app, name), action, yes)
    _report(app, transition)


# =========================================================================
# Root CLI
# =========================================================================
@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="macos-tweaks")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write logs to this file",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, log_file: str | None) -> None:
    """macOS Tweaks - browse and toggle macOS system tweaks.

    Run without a command to open the interactive navigator.

    **Commands:**

        macos-tweaks list      List every tweak by category

        macos-tweaks show      Show one tweak's commands and flags

        macos-tweaks apply     Apply a tweak

        macos-tweaks revert    Revert a tweak

        macos-tweaks pick      Pick from a package list and act on one entry
    """
    interactive = ctx.invoked_subcommand is None
    configure_logging(
        level="DEBUG" if verbose else None,
        file_path=log_file,
        console=not interactive,
        force=True,
    )

    if ctx.obj is None:
        try:
            ctx.obj = build_app(config=load_config())
        except CatalogError as e:
            error_exit(str(e), EXIT_CATALOG_ERROR)

    if interactive:
        from mactweaks.frontends.tui.navigator import run_navigator

        run_navigator(ctx.obj)


@cli.command("list")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
@click.pass_obj
def list_tweaks(app: TweaksApp, json_output: bool) -> None:
    """List every tweak, grouped by category.

    **Examples:**

        macos-tweaks list

        macos-tweaks list --json
    """
    categories = app.registry.categories()
    data = [
        {
            "name": category.name,
            "description": category.description,
            "tweaks": [tweak.to_dict() for tweak in category.tweaks],
        }
        for category in categories
    ]

    def show_table() -> None:
        rows = [
            [category.name, tweak.name, _flags(tweak)]
            for category in categories
            for tweak in category.tweaks
        ]
        print_table(["CATEGORY", "TWEAK", "FLAGS"], rows, group_column=0)

    output_json_or_table(data, json_output, show_table)


@cli.command()
@click.argument("name")
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
@click.pass_obj
def show(app: TweaksApp, name: str, json_output: bool) -> None:
    """Show a tweak's description, commands and flags.

    **Examples:**

        macos-tweaks show "Auto-hide Dock"
    """
    tweak = _resolve(app, name)
    category = app.registry.category_of(tweak.name)
    state = app.controller.status(tweak.name)

    if json_output:
        output_json({**tweak.to_dict(), "category": category.name, "state": state.to_dict()})
        return

    console = make_console(app.config.color_scheme)
    console.print(tweak.name, style="title", markup=False)
    console.print(tweak.description, style="text", markup=False)
    console.print()
    location = f"{category.name} / {tweak.group}" if tweak.group else category.name
    console.print(f"[dim]Category:[/dim] {escape(location)}")
    console.print(f"[dim]Apply:[/dim]    {escape(tweak.apply_command)}")
    revert = tweak.revert_command if tweak.revertible else "(not revertible)"
    console.print(f"[dim]Revert:[/dim]   {escape(revert)}")
    if tweak.lists_items:
        console.print(f"[dim]Pick:[/dim]     {escape(tweak.item_command)}")
    flags = _flags(tweak)
    if flags:
        console.print(f"[dim]Flags:[/dim]    [hint]{escape(flags)}[/hint]")


@cli.command("apply")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_obj
def apply_tweak(app: TweaksApp, name: str, yes: bool) -> None:
    """Apply a tweak by name.

    Tweaks that delete data ask for confirmation first.

    **Examples:**

        macos-tweaks apply "Auto-hide Dock"

        macos-tweaks apply "Clear User Cache (destructive)" --yes
    """
    _run_action(app, name, TweakAction.APPLY, yes)


@cli.command("revert")
@click.argument("name")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_obj
def revert_tweak(app: TweaksApp, name: str, yes: bool) -> None:
    """Revert a tweak by name.

    **Examples:**

        macos-tweaks revert "Auto-hide Dock"
    """
    _run_action(app, name, TweakAction.REVERT, yes)


@cli.command()
@click.argument("name")
@click.argument("item", required=False)
@click.option("--json", "-j", "json_output", is_flag=True, help="Output the list as JSON")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation prompt")
@click.pass_obj
def pick(app: TweaksApp, name: str, item: str | None, json_output: bool, yes: bool) -> None:
    """List what a listing tweak prints, or run its item command on one entry.

    Without ITEM the entries are printed one per line. With ITEM the
    listing runs first and ITEM must be one of its entries.

    **Examples:**

        macos-tweaks pick "List Outdated Packages"

        macos-tweaks pick "List Outdated Packages" wget

        macos-tweaks pick "List Installed Packages" git
    """
    tweak = _resolve(app, name)
    if not tweak.lists_items:
        error_exit(str(NotListableError(tweak.name)), EXIT_TWEAK_ERROR)

    engine, transition = _start(app, tweak, TweakAction.APPLY, yes)
    if transition.error is not None:
        error_exit(str(transition.error), EXIT_TWEAK_ERROR)
    items = engine.visible_items() if engine.mode is Mode.ITEM_LIST else []

    if item is None:
        if json_output:
            output_json(items)
        elif items:
            click.echo("\n".join(items))
        else:
            click.echo(transition.message)
        return

    try:
        engine.focus_item(item)
    except UnknownItemError as e:
        error_exit(str(e), EXIT_TWEAK_ERROR)
    _report(app, engine.handle(Key.SELECT))


def main() -> None:
    """Main entry point for the CLI."""
    cli()
