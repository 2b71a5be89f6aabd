"""Rich UI components for the CLI.

Kept apart from the commands so the menu and the one-shot commands render
orders the same way.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Order, format_amount, format_date

MENU_ITEMS: tuple[tuple[int, str], ...] = (
    (1, "Load orders from file"),
    (2, "Save orders to file"),
    (3, "Show all orders"),
    (4, "Sort orders"),
    (5, "Search orders"),
    (6, "Add a new order"),
    (7, "Remove an order"),
    (8, "Edit an order"),
    (9, "Exit"),
)

SORT_ITEMS: tuple[tuple[int, str], ...] = (
    (1, "ID"),
    (2, "Client"),
    (3, "Date"),
    (4, "Amount"),
    (5, "Status"),
)


def print_banner(console: Console) -> None:
    """Print the welcome banner shown before the interactive menu."""

    title = Text("ORDER DESK", style="bold cyan")
    subtitle = Text("Orders • JSON / XML / CSV", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_menu_panel() -> Panel:
    body = Text()
    for number, label in MENU_ITEMS:
        body.append(f"{number}. ", style="bold cyan")
        body.append(f"{label}\n")
    return Panel(body, title="Order management", border_style="cyan")


def build_sort_panel() -> Panel:
    body = Text()
    for number, label in SORT_ITEMS:
        body.append(f"{number}. ", style="bold cyan")
        body.append(f"{label}\n")
    return Panel(body, title="Sort by", border_style="cyan")


def build_orders_table(orders: Sequence[Order], *, title: str = "Orders") -> Table:
    """Create a Rich table with one row per order."""

    table = Table(title=title)
    table.add_column("ID", style="cyan", justify="right", no_wrap=True)
    table.add_column("Client", style="white")
    table.add_column("Date", style="magenta", no_wrap=True)
    table.add_column("Amount", style="green", justify="right", no_wrap=True)
    table.add_column("Status", style="yellow")
    for order in orders:
        table.add_row(
            str(order.id),
            Text(order.client),
            format_date(order.order_date),
            format_amount(order.amount),
            Text(order.status),
        )
    return table


def print_orders(console: Console, orders: Sequence[Order], *, title: str = "Orders") -> None:
    if not orders:
        console.print("[yellow]No orders to display.[/yellow]")
        return
    console.print(build_orders_table(orders, title=title))
