"""Interactive menu loop.

Prompts are read through an injectable `ask` callable (defaults to
`rich.prompt.Prompt.ask`) so the loop can be driven by scripted answers.
Every exception raised by an action goes to the error log, is printed, and
the loop goes on.
"""

from __future__ import annotations

from typing import Callable

from rich.console import Console
from rich.markup import escape
from rich.prompt import Prompt

from adapters.error_log import ErrorLog
from cli.ui_components import build_menu_panel, build_sort_panel, print_orders
from core.domain.models import Order, OrderPatch, format_amount, format_date
from core.domain.outcomes import Outcome
from core.services.order_store import OrderStore, SortKey

Ask = Callable[[str], str]

EXIT_CHOICE = 9

_SORT_CHOICES: dict[int, SortKey] = {
    1: SortKey.ID,
    2: SortKey.CLIENT,
    3: SortKey.DATE,
    4: SortKey.AMOUNT,
    5: SortKey.STATUS,
}


class OrderMenu:
    """Numbered-menu front end over an `OrderStore`."""

    def __init__(
        self,
        store: OrderStore,
        *,
        console: Console,
        error_log: ErrorLog,
        ask: Ask | None = None,
    ) -> None:
        self.store = store
        self._console = console
        self._error_log = error_log
        self._ask: Ask = ask or self._prompt
        self._actions: dict[int, Callable[[], None]] = {
            1: self.load_orders,
            2: self.save_orders,
            3: self.show_orders,
            4: self.sort_orders,
            5: self.search_orders,
            6: self.add_order,
            7: self.remove_order,
            8: self.edit_order,
        }

    def _prompt(self, message: str) -> str:
        return Prompt.ask(message, console=self._console, default="", show_default=False)

    def _read_int(self, message: str) -> int:
        return int(self._ask(message).strip())

    def run(self) -> None:
        while True:
            self._console.print(build_menu_panel())
            try:
                raw = self._ask("Choose an action")
            except (EOFError, KeyboardInterrupt):
                self._console.print()
                return

            try:
                choice = int(raw.strip())
            except ValueError:
                self._console.print("[yellow]Invalid input. Please enter a number.[/yellow]")
                continue

            if choice == EXIT_CHOICE:
                return
            action = self._actions.get(choice)
            if action is None:
                self._console.print("[yellow]Invalid choice. Try again.[/yellow]")
                continue

            try:
                action()
            except (EOFError, KeyboardInterrupt):
                self._console.print()
                return
            except Exception as exc:
                self._error_log.record(exc)
                self._console.print(f"[red]Error:[/red] {escape(str(exc))}")

    def load_orders(self) -> None:
        path = self._ask("File path").strip()
        count = self.store.load(path)
        self._console.print(f"[green]Loaded {count} orders.[/green]")

    def save_orders(self) -> None:
        if len(self.store) == 0:
            self._console.print("[yellow]No orders to save.[/yellow]")
            return
        path = self._ask("File path").strip()
        if self.store.save(path) is Outcome.EMPTY:
            self._console.print("[yellow]No orders to save.[/yellow]")
            return
        self._console.print("[green]Orders saved.[/green]")

    def show_orders(self) -> None:
        print_orders(self._console, self.store.list())

    def sort_orders(self) -> None:
        self._console.print(build_sort_panel())
        raw = self._ask("Sort option")
        try:
            number = int(raw.strip())
        except ValueError:
            self._console.print("[yellow]Invalid input.[/yellow]")
            return
        key = _SORT_CHOICES.get(number)
        orders = self.store.sort_by(key) if key is not None else self.store.list()
        print_orders(self._console, orders, title=f"Orders by {key.value}" if key else "Orders")

    def search_orders(self) -> None:
        term = self._ask("Search term")
        results = self.store.search(term)
        print_orders(self._console, results, title="Search results")
        self._console.print(f"Found {len(results)} orders.")

    def add_order(self) -> None:
        order = Order.model_validate(
            {
                "id": self._read_int("ID"),
                "client": self._ask("Client name"),
                "order_date": self._ask("Order date (yyyy-MM-dd)"),
                "amount": self._ask("Amount"),
                "status": self._ask("Status"),
            }
        )
        self.store.add(order)
        self._console.print("[green]Order added.[/green]")

    def remove_order(self) -> None:
        order_id = self._read_int("ID of the order to remove")
        if not self.store.remove(order_id).ok:
            self._console.print("[yellow]Order not found.[/yellow]")
            return
        self._console.print("[green]Order removed.[/green]")

    def edit_order(self) -> None:
        order_id = self._read_int("ID of the order to edit")
        order = self.store.find(order_id)
        if order is None:
            self._console.print("[yellow]Order not found.[/yellow]")
            return

        self._console.print(escape(order.display()))
        self._console.print("[dim]Leave a field blank to keep its current value.[/dim]")
        patch = OrderPatch.model_validate(
            {
                "client": self._ask(f"New client ({escape(order.client)})"),
                "order_date": self._ask(f"New order date ({format_date(order.order_date)})"),
                "amount": self._ask(f"New amount ({format_amount(order.amount)})"),
                "status": self._ask(f"New status ({escape(order.status)})"),
            }
        )
        if patch.is_empty:
            self._console.print("No changes.")
            return
        self.store.edit(order_id, patch)
        self._console.print("[green]Order updated.[/green]")
