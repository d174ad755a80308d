"""
Root Typer application for the sqlbridge CLI.

The database connection comes from the same ``DB_*`` environment variables
the MCP server reads.
"""

from __future__ import annotations

import typer
from typer import Typer

from sqlbridge.cli.utils import (
    console,
    err_console,
    output_result,
    parse_json_args,
    run_operation,
    with_dispatcher,
)
from sqlbridge.core.errors import ConnectivityError

app = Typer(
    name="sqlbridge",
    help="sqlbridge: one operation catalog over MySQL and PostgreSQL.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


# ── Version callback ─────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        from sqlbridge import __version__

        typer.echo(f"sqlbridge {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool | None = typer.Option(  # noqa: UP007
        None,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """sqlbridge CLI: serve the MCP tools or run catalog operations directly."""


# ── Commands ─────────────────────────────────────────────────────────────


@app.command()
def serve(
    transport: str = typer.Option("stdio", "--transport", "-t", help="stdio or http"),
    port: int = typer.Option(8120, "--port", "-p", help="Port for the http transport"),
) -> None:
    """Start the MCP server."""
    from sqlbridge.mcp.server import run

    run(transport=transport, port=port)


@app.command()
def check() -> None:
    """Probe the configured database."""

    async def _probe(dispatcher) -> str:
        await dispatcher.adapter.test_connection()
        return dispatcher.adapter.config.to_connection_string()

    try:
        target = with_dispatcher(_probe)
    except ConnectivityError as e:
        err_console.print(f"[bold red]Connection failed[/bold red]: {e.message}")
        raise typer.Exit(code=1) from e
    console.print(f"[bold green]OK[/bold green] {target}", highlight=False)


@app.command()
def tables(
    include_columns: bool = typer.Option(False, "--columns", "-c", help="Include columns and types"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """List tables."""
    result = run_operation("list-tables", {"include_columns": include_columns})
    output_result(result, as_json=json_out, title="Tables")


@app.command()
def query(
    sql: str = typer.Argument(..., help="SELECT statement"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Run a read-only SELECT query."""
    result = run_operation("run-readonly-query", {"query": sql})
    output_result(result, as_json=json_out)


@app.command("run")
def run_command(
    operation: str = typer.Argument(..., help="Catalog operation, e.g. drop-table"),
    args: str | None = typer.Option(None, "--args", "-a", help="Arguments as a JSON object"),
    json_out: bool = typer.Option(False, "--json", help="JSON output"),
) -> None:
    """Run any catalog operation with JSON arguments."""
    result = run_operation(operation, parse_json_args(args))
    output_result(result, as_json=json_out, title=operation)


@app.command()
def operations() -> None:
    """List the operation catalog."""
    from rich.table import Table

    from sqlbridge.ops.dispatcher import OPERATIONS

    table = Table(title="Operations", pad_edge=False)
    table.add_column("name")
    table.add_column("description")
    table.add_column("confirmation phrase", overflow="fold")
    for spec in OPERATIONS.values():
        table.add_row(spec.name, spec.description, spec.confirmation or "")
    console.print(table)


if __name__ == "__main__":
    app()
