"""
CLI utility helpers: output formatting and dispatcher lifecycle.
"""

from __future__ import annotations

import asyncio
import json
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeVar

import typer
from rich.console import Console
from rich.table import Table

from sqlbridge.core.adapters import get_adapter
from sqlbridge.core.errors import ConfigError
from sqlbridge.core.logging import configure_logging
from sqlbridge.core.settings import load_settings
from sqlbridge.ops.dispatcher import Dispatcher
from sqlbridge.ops.result import OperationResult

console = Console()
err_console = Console(stderr=True)

R = TypeVar("R")


# ── Dispatcher helpers ───────────────────────────────────────────────────


def make_dispatcher() -> Dispatcher:
    """Build a dispatcher from the environment; config problems exit with code 2."""
    try:
        settings = load_settings()
        configure_logging(level=settings.log_level, json_format=settings.log_json)
        config = settings.to_config()
    except ConfigError as e:
        err_console.print(f"[bold red]Configuration error[/bold red]: {e.message}")
        raise typer.Exit(code=2) from e
    return Dispatcher(get_adapter(config), caller="cli")


def with_dispatcher(fn: Callable[[Dispatcher], Awaitable[R]]) -> R:
    """Run ``fn`` against a fresh dispatcher and close its pool afterwards."""
    dispatcher = make_dispatcher()

    async def _main() -> R:
        try:
            return await fn(dispatcher)
        finally:
            await dispatcher.close()

    return asyncio.run(_main())


def run_operation(name: str, arguments: Mapping[str, Any] | None = None) -> OperationResult:
    """Dispatch one catalog operation and return its envelope."""
    return with_dispatcher(lambda d: d.dispatch(name, arguments or {}))


def parse_json_args(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        err_console.print(f"[bold red]Error[/bold red]: --args is not valid JSON: {e}")
        raise typer.Exit(code=2) from e
    if not isinstance(value, dict):
        err_console.print("[bold red]Error[/bold red]: --args must be a JSON object")
        raise typer.Exit(code=2)
    return value


# ── Output helpers ───────────────────────────────────────────────────────


def output_result(
    result: OperationResult,
    *,
    as_json: bool = False,
    title: str = "",
) -> None:
    """Render an ``OperationResult`` to the terminal."""
    if not result.success:
        err = result.error
        msg = err.message if err else "Unknown error"
        code = err.code if err else "ERROR"
        err_console.print(f"[bold red]Error[/bold red] ({code}): {msg}", markup=True, highlight=False)
        if err and "expected_phrase" in err.details:
            err_console.print(f"Expected phrase: {err.details['expected_phrase']}", markup=False)
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps(result.to_dict(), default=str))
        return

    data = result.data
    if isinstance(data, list) and data and all(isinstance(d, dict) for d in data):
        _print_table(data, title=title)
    elif result.text:
        console.print(result.text, markup=False, highlight=False)
    elif isinstance(data, dict):
        _print_dict(data, title=title)
    else:
        console.print("[dim]No items.[/dim]")


# ── Private helpers ──────────────────────────────────────────────────────


def _print_table(items: list[dict[str, Any]], *, title: str = "") -> None:
    """Render a list of dicts as a Rich table."""
    table = Table(title=title or None, show_lines=False, pad_edge=False)
    for col in items[0]:
        table.add_column(str(col), overflow="fold")
    for item in items:
        table.add_row(*("NULL" if v is None else str(v) for v in item.values()))
    console.print(table)


def _print_dict(data: dict[str, Any], *, title: str = "") -> None:
    """Render a single dict as key-value pairs."""
    if title:
        console.print(f"[bold]{title}[/bold]")
    for k, v in data.items():
        console.print(f"  [cyan]{k}[/cyan]: {v}")
