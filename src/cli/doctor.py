"""Doctor command for environment diagnostics."""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from adapters.codecs import supported_extensions
from core.config import AppSettings, get_user_env_file, write_user_env_vars
from core.services.order_store import OrderStore

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_error_log(path: Path) -> tuple[bool, str]:
    """Append nothing, but make sure the error log could be opened for append."""

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8"):
            pass
        return True, str(path.resolve())
    except OSError as exc:
        return False, str(exc)


def _check_data_file(path: Path, *, json_indent: int) -> tuple[bool, str]:
    try:
        count = OrderStore(json_indent=json_indent).load(path)
        return True, f"{count} orders in {path}"
    except Exception as exc:
        return False, str(exc)


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="Order Desk Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    env_file = get_user_env_file()
    table.add_row("User config", "OK" if env_file.exists() else "DEFAULTS", str(env_file))
    table.add_row("Log level", "OK", settings.log_level)
    table.add_row("JSON indent", "OK", str(settings.json_indent))
    table.add_row("Formats", "OK", ", ".join(supported_extensions()))

    ok_log, detail_log = _check_error_log(settings.error_log_path)
    table.add_row("Error log", "OK" if ok_log else "FAIL", detail_log)

    ok_data = True
    if settings.default_data_path is None:
        table.add_row("Default data file", "OPTIONAL", "Not set -> menu starts empty")
    else:
        ok_data, detail_data = _check_data_file(settings.default_data_path, json_indent=settings.json_indent)
        table.add_row("Default data file", "OK" if ok_data else "FAIL", detail_data)

    _console.print(table)

    if not ok_log:
        _console.print(
            "\n[yellow]Note:[/yellow] failures will not be journaled; set ORDER_DESK_ERROR_LOG_PATH to a writable file."
        )
    if not (ok_log and ok_data):
        raise typer.Exit(code=1)


@app.command()
def setup() -> None:
    """Interactive setup (stores defaults in the user config .env)."""

    current = AppSettings()

    data_path = typer.prompt(
        "Default order file (blank for none)",
        default=str(current.default_data_path or ""),
        show_default=True,
    ).strip()
    error_log = typer.prompt("Error log file", default=str(current.error_log_path), show_default=True).strip()
    log_level = typer.prompt("Log level", default=current.log_level, show_default=True).strip().upper()

    if not error_log:
        raise typer.BadParameter("error log path is required")

    values = {
        "ORDER_DESK_ERROR_LOG_PATH": error_log,
        "ORDER_DESK_LOG_LEVEL": log_level,
    }
    if data_path:
        values["ORDER_DESK_DEFAULT_DATA_PATH"] = data_path

    # Validate before writing.
    AppSettings(
        error_log_path=Path(error_log),
        log_level=log_level,
        default_data_path=Path(data_path) if data_path else None,
    )

    env_path = write_user_env_vars(values)
    _console.print(f"[green]Saved config to:[/green] {env_path}")
