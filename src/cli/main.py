"""Command-line entry point.

Running `order-desk` with no sub-command opens the interactive menu; the
sub-commands run a single operation against a file and exit.
"""

from __future__ import annotations

import sys
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.markup import escape

from adapters.error_log import ErrorLog
from cli.doctor import app as doctor_app
from cli.logging_setup import configure_logging
from cli.menu import OrderMenu
from cli.ui_components import print_banner, print_orders
from core.config import AppSettings
from core.domain.models import Order, OrderPatch
from core.domain.outcomes import Outcome
from core.services.order_store import OrderStore, SortKey

app = typer.Typer(help="Manage order files (JSON, XML, CSV): view, sort, search, edit, convert.")
app.add_typer(doctor_app, name="doctor")

_console = Console()
_err_console = Console(stderr=True)


def _settings(ctx: typer.Context) -> AppSettings:
    if isinstance(ctx.obj, AppSettings):
        return ctx.obj
    return AppSettings()


def _new_store(settings: AppSettings) -> OrderStore:
    return OrderStore(json_indent=settings.json_indent)


@contextmanager
def _reporting_errors(settings: AppSettings) -> Iterator[None]:
    """Log any failure to the error log, print it, and exit with code 1."""

    try:
        yield
    except typer.Exit:
        raise
    except Exception as exc:
        error_log = ErrorLog(settings.error_log_path)
        try:
            error_log.record(exc)
        finally:
            error_log.close()
        _err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1) from exc


def _run_menu(settings: AppSettings, preload: Path | None) -> None:
    store = _new_store(settings)
    error_log = ErrorLog(settings.error_log_path)
    if settings.show_banner:
        print_banner(_console)

    preload = preload or settings.default_data_path
    if preload is not None:
        try:
            count = store.load(preload)
            _console.print(f"[green]Loaded {count} orders from {escape(str(preload))}.[/green]")
        except Exception as exc:
            error_log.record(exc)
            _console.print(f"[red]Error:[/red] {escape(str(exc))}")

    try:
        OrderMenu(store, console=_console, error_log=error_log).run()
    finally:
        error_log.close()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr."),
) -> None:
    """Open the interactive menu when no command is given."""

    settings = AppSettings()
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings
    if ctx.invoked_subcommand is None:
        _run_menu(settings, None)


@app.command()
def menu(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Order file to load at start."),
) -> None:
    """Interactive menu (load, save, show, sort, search, add, remove, edit)."""

    _run_menu(_settings(ctx), file)


@app.command()
def show(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Order file (.json, .xml, .csv)."),
    sort: Optional[SortKey] = typer.Option(None, "--sort", "-s", help="Field to sort by."),
) -> None:
    """Print the orders of a file."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        store.load(path)
        orders = store.sort_by(sort) if sort is not None else store.list()
        print_orders(_console, orders, title=path.name)


@app.command()
def search(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Order file (.json, .xml, .csv)."),
    term: str = typer.Argument(..., help="Case-insensitive text to look for in any field."),
) -> None:
    """Print the orders where any field contains TERM."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        store.load(path)
        results = store.search(term)
        print_orders(_console, results, title="Search results")
        _console.print(f"Found {len(results)} orders.")


@app.command()
def add(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Order file; created when missing."),
    order_id: int = typer.Option(..., "--id", help="Order id."),
    client: str = typer.Option(..., "--client", help="Client name."),
    order_date: str = typer.Option(..., "--date", help="Order date (yyyy-MM-dd)."),
    amount: str = typer.Option(..., "--amount", help="Order amount."),
    status: str = typer.Option(..., "--status", help="Status label."),
) -> None:
    """Append an order to a file."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        if path.exists():
            store.load(path)
        store.add(
            Order.model_validate(
                {
                    "id": order_id,
                    "client": client,
                    "order_date": order_date,
                    "amount": amount,
                    "status": status,
                }
            )
        )
        store.save(path)
        _console.print(f"[green]Order {order_id} added ({len(store)} orders).[/green]")


@app.command()
def remove(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Order file."),
    order_id: int = typer.Argument(..., help="Id of the order to remove."),
) -> None:
    """Remove the first order with ORDER_ID from a file."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        store.load(path)
        if not store.remove(order_id).ok:
            _err_console.print(f"[yellow]Order {order_id} not found.[/yellow]")
            raise typer.Exit(code=1)
        if store.save(path) is Outcome.EMPTY:
            # Last order removed: nothing is written, the old file stays.
            _console.print("[yellow]No orders left; file not rewritten.[/yellow]")
            return
        _console.print(f"[green]Order {order_id} removed.[/green]")


@app.command()
def edit(
    ctx: typer.Context,
    path: Path = typer.Argument(..., help="Order file."),
    order_id: int = typer.Argument(..., help="Id of the order to edit."),
    client: Optional[str] = typer.Option(None, "--client", help="New client name."),
    order_date: Optional[str] = typer.Option(None, "--date", help="New order date (yyyy-MM-dd)."),
    amount: Optional[str] = typer.Option(None, "--amount", help="New amount."),
    status: Optional[str] = typer.Option(None, "--status", help="New status label."),
) -> None:
    """Change fields of the first order with ORDER_ID; omitted fields are kept."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        store.load(path)
        patch = OrderPatch.model_validate(
            {"client": client, "order_date": order_date, "amount": amount, "status": status}
        )
        if not store.edit(order_id, patch).ok:
            _err_console.print(f"[yellow]Order {order_id} not found.[/yellow]")
            raise typer.Exit(code=1)
        if patch.is_empty:
            _console.print("Nothing to change.")
            return
        store.save(path)
        _console.print(f"[green]Order {order_id} updated.[/green]")


@app.command()
def convert(
    ctx: typer.Context,
    source: Path = typer.Argument(..., help="File to read."),
    target: Path = typer.Argument(..., help="File to write; format from its extension."),
) -> None:
    """Rewrite an order file in another format."""

    settings = _settings(ctx)
    store = _new_store(settings)
    with _reporting_errors(settings):
        count = store.load(source)
        if store.save(target) is Outcome.EMPTY:
            _console.print("[yellow]No orders to save.[/yellow]")
            return
        _console.print(f"[green]Converted {count} orders: {escape(str(source))} -> {escape(str(target))}[/green]")


def run() -> None:
    # Windows terminals default to cp1252.
    if sys.platform == "win32":
        sys.stdout.reconfigure(encoding="utf-8")
        sys.stderr.reconfigure(encoding="utf-8")
    app()
