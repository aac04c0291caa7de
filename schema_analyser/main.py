"""Schema analyser - Main entry point."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import typer
from typing_extensions import Annotated
from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .config import settings
from .database import (
    CatalogConnection,
    MySqlConnection,
    MySqlDialect,
    ObjectKind,
    ProgressSink,
    SchemaAnalyser,
)
from .errors import AnalyserError

app = typer.Typer(
    name="schema-analyser",
    help="Analyse the structure of MySQL and MariaDB databases",
    add_completion=False,
)

console = Console()
err_console = Console(stderr=True)

HostOption = Annotated[Optional[str], typer.Option("--host", help="Server host (default: from settings)")]
PortOption = Annotated[Optional[int], typer.Option("--port", help="Server port (default: from settings)")]
UserOption = Annotated[Optional[str], typer.Option("--user", "-u", help="User name (default: from settings)")]
PasswordOption = Annotated[Optional[str], typer.Option("--password", "-p", help="Password (default: from settings)")]
DatabaseOption = Annotated[Optional[str], typer.Option("--database", "-d", help="Database to analyse (default: from settings)")]
JsonOption = Annotated[bool, typer.Option("--json", help="Print the result as JSON")]
OutputOption = Annotated[Optional[Path], typer.Option("--output", "-o", help="Write the result as JSON to a file")]


class RichProgressSink(ProgressSink):
    """Shows analysis stages on a rich progress task."""

    def __init__(self, progress: Progress, task_id):
        self.progress = progress
        self.task_id = task_id

    def notify(self, message: Optional[str]):
        if message is not None:
            self.progress.update(self.task_id, description=message)


def create_connection(
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    password: Optional[str],
    database: str,
) -> CatalogConnection:
    """Create a connection, falling back to settings for unset options."""
    return MySqlConnection(
        host=host or settings.mysql_host,
        port=port or settings.mysql_port,
        user=user or settings.mysql_user,
        password=password if password is not None else settings.mysql_password,
        database=database,
        connect_timeout=settings.mysql_connect_timeout,
    )


def _resolve_database(database: Optional[str]) -> str:
    database = database or settings.mysql_database
    if not database:
        console.print("[red]No database given. Use --database or set MYSQL_DATABASE.[/red]")
        raise typer.Exit(1)
    return database


async def _run(connection: CatalogConnection, database: str, operation: Callable, progress: Optional[ProgressSink] = None):
    async with connection:
        analyser = SchemaAnalyser(connection, MySqlDialect(), database, progress=progress)
        return await operation(analyser)


def _execute(
    operation: Callable,
    description: str,
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    password: Optional[str],
    database: Optional[str],
):
    """Run an analyser operation with a spinner, mapping errors to exit code 1."""
    database = _resolve_database(database)
    connection = create_connection(host, port, user, password, database)
    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=err_console,
            transient=True,
        ) as progress:
            task = progress.add_task(description, total=None)
            sink = RichProgressSink(progress, task)
            return asyncio.run(_run(connection, database, operation, progress=sink))
    except AnalyserError as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)


def _emit_json(data: Dict[str, Any], output: Optional[Path]):
    text = json.dumps(data, indent=2, default=str)
    if output:
        output.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {output}[/green]")
    else:
        typer.echo(text)


@app.command()
def analyse(
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    database: DatabaseOption = None,
    as_json: JsonOption = False,
    output: OutputOption = None,
):
    """Run a full analysis of the database structure."""
    structure = _execute(
        lambda analyser: analyser.run_full_analysis(),
        "Connecting...", host, port, user, password, database,
    )

    if as_json or output:
        _emit_json(structure.to_dict(), output)
        return

    table = Table(title="Database structure")
    table.add_column("Kind", style="cyan")
    table.add_column("Name")
    table.add_column("Columns", justify="right")
    table.add_column("Keys / indexes", justify="right")
    table.add_column("Content hash", style="dim")

    for item in structure.tables:
        keys = len(item.foreign_keys) + len(item.indexes) + len(item.uniques) + (1 if item.primary_key else 0)
        table.add_row("table", item.pure_name, str(len(item.columns)), str(keys), str(item.content_hash))
    for item in structure.views:
        table.add_row("view", item.pure_name, str(len(item.columns)), "", str(item.content_hash))
    for item in structure.procedures:
        table.add_row("procedure", item.pure_name, "", "", str(item.content_hash))
    for item in structure.functions:
        table.add_row("function", item.pure_name, "", "", str(item.content_hash))

    console.print(table)


@app.command()
def snapshot(
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    database: DatabaseOption = None,
    as_json: JsonOption = False,
    output: OutputOption = None,
):
    """Take a fast snapshot of object names and content hashes."""
    result = _execute(
        lambda analyser: analyser.get_fast_snapshot(),
        "Loading modifications...", host, port, user, password, database,
    )

    if as_json or output:
        _emit_json(result.to_dict(), output)
        return

    table = Table(title="Fast snapshot")
    table.add_column("Kind", style="cyan")
    table.add_column("Object")
    table.add_column("Content hash", style="dim")
    for kind in ObjectKind:
        for entry in result.entries(kind):
            table.add_row(kind.value, entry.object_id, str(entry.content_hash))

    console.print(table)


@app.command("object")
def analyse_object(
    kind: Annotated[ObjectKind, typer.Argument(help="Object kind")],
    name: Annotated[str, typer.Argument(help="Object name")],
    host: HostOption = None,
    port: PortOption = None,
    user: UserOption = None,
    password: PasswordOption = None,
    database: DatabaseOption = None,
    output: OutputOption = None,
):
    """Analyse a single object and print it as JSON."""
    obj = _execute(
        lambda analyser: analyser.analyse_object(kind, name),
        f"Analysing {name}...", host, port, user, password, database,
    )
    _emit_json(obj.to_dict(), output)


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Host: {settings.mysql_host}")
    console.print(f"  Port: {settings.mysql_port}")
    console.print(f"  User: {settings.mysql_user}")
    console.print(f"  Password configured: {'Yes' if settings.mysql_password else 'No'}")
    console.print(f"  Database: {settings.mysql_database or 'Not set'}")
    console.print(f"  Log level: {settings.log_level}")


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """
    Schema analyser - extract tables, views, keys, indexes and routines.

    Examples:

        schema-analyser analyse --database shop

        schema-analyser snapshot --database shop --json

        schema-analyser object tables orders --database shop
    """
    logging.basicConfig(level=logging.DEBUG if verbose else settings.log_level.upper())


if __name__ == "__main__":
    app()
