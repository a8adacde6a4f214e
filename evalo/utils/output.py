"""Shared console output utilities."""

import json
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from evalo.exceptions import EvaloError

# Shared console instances for all CLI output
console = Console()
err_console = Console(stderr=True)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    print(json.dumps(data, indent=2, default=str, ensure_ascii=False))


def print_error(error: EvaloError) -> None:
    """Show an evalo error as a red panel on stderr."""
    body = escape(error.message)
    if error.context:
        details = "\n".join(f"[dim]{k}:[/dim] {escape(str(v))}" for k, v in error.context.items())
        body = f"{body}\n\n{details}"
    err_console.print(Panel(body, title=type(error).__name__, border_style="red"))
