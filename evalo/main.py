#!/usr/bin/env python3
"""
Main CLI entry point for evalo
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from evalo import __version__
from evalo.config.ui_config import get_palette_config, get_theme
from evalo.exceptions import EvaloError
from evalo.ui.command_palette.palette_commands import (
    CommandRegistry,
    UserInfo,
    filter_commands,
    get_command_registry,
    load_registry,
    registry_to_dicts,
)
from evalo.utils.logging_utils import get_logger
from evalo.utils.output import console, print_error, print_json

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="evalo - keyboard-driven command palette for the Evalo front-end",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    evalo - keyboard-driven command palette

    [bold]Examples:[/bold]

    Launch the app as a teacher:
        [cyan]evalo run --role teacher[/cyan]

    List what a student sees for "go":
        [cyan]evalo commands --role student --query go[/cyan]
    """
    ctx.obj = {"verbose": verbose}
    if verbose:
        get_logger("evalo", logging.DEBUG)


def _resolve_registry(registry_path: Optional[Path]) -> CommandRegistry:
    """Registry from --registry, then the config file, then the built-in table."""
    if registry_path is None:
        configured = get_palette_config()["registry_path"]
        if configured:
            registry_path = Path(configured).expanduser()
    if registry_path is None:
        return get_command_registry()
    return load_registry(registry_path)


def _resolve_user(role: Optional[str]) -> Optional[UserInfo]:
    return UserInfo(role=role) if role else None


@app.command()
def version():
    """Show evalo version"""
    typer.echo(f"evalo version {__version__}")


@app.command()
def commands(
    role: Optional[str] = typer.Option(
        None, "--role", "-r", help="Role of the signed-in user (omit for guest)"
    ),
    query: str = typer.Option("", "--query", "-q", help="Text to match against titles"),
    registry_path: Optional[Path] = typer.Option(
        None, "--registry", help="YAML command registry to use instead of the built-in one"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """List the commands the palette would show."""
    try:
        registry = _resolve_registry(registry_path)
    except EvaloError as e:
        print_error(e)
        raise typer.Exit(1) from e

    visible = filter_commands(registry, query, _resolve_user(role))

    if json_output:
        print_json(registry_to_dicts(visible))
        return

    if not visible:
        console.print(f'[yellow]No results found for "{escape(query)}"[/yellow]')
        return

    table = Table(title=f"Commands for {role or 'guest'}")
    table.add_column("ID", style="cyan", no_wrap=True)
    table.add_column("Title", no_wrap=True)
    table.add_column("Section", style="dim")
    table.add_column("Role")
    table.add_column("Action", style="green")
    for cmd in visible:
        table.add_row(
            cmd.id,
            f"{cmd.icon} {cmd.title}",
            cmd.section,
            cmd.role or "-",
            cmd.action.describe(),
        )
    console.print(table)


@app.command("run")
def run_app(
    ctx: typer.Context,
    role: Optional[str] = typer.Option(
        None, "--role", "-r", help="Role of the signed-in user (omit for guest)"
    ),
    registry_path: Optional[Path] = typer.Option(
        None, "--registry", help="YAML command registry to use instead of the built-in one"
    ),
):
    """Launch the Evalo TUI with the command palette."""
    from evalo.ui.app import EvaloApp
    from evalo.utils.logging_utils import setup_tui_logging

    setup_tui_logging(verbose=bool(ctx.obj and ctx.obj.get("verbose")))

    try:
        registry = _resolve_registry(registry_path)
        open_key = get_palette_config()["open_key"]
    except EvaloError as e:
        print_error(e)
        raise typer.Exit(1) from e

    logger.info(f"Starting evalo as {role or 'guest'} with {len(registry)} commands")
    EvaloApp(
        registry=registry,
        user=_resolve_user(role),
        open_key=open_key,
        theme_name=get_theme(),
    ).run()


def run():
    """Console script entry point."""
    app()


if __name__ == "__main__":
    run()
