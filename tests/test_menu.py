from __future__ import annotations

import io
from datetime import date
from decimal import Decimal
from pathlib import Path

from rich.console import Console

from adapters.error_log import ErrorLog
from cli.menu import OrderMenu
from core.domain.models import Order
from core.services.order_store import OrderStore

SAMPLE_CSV = "Id,Client,OrderDate,Amount,Status\n1,Acme,2024-01-05,99.50,Open\n2,Beta,2024-02-10,10,Closed"


def make_order(order_id=1, client="Acme", order_date=date(2024, 1, 5), amount="99.50", status="Open"):
    return Order(id=order_id, client=client, order_date=order_date, amount=Decimal(amount), status=status)


def run_menu(tmp_path: Path, answers, store=None):
    store = store if store is not None else OrderStore()
    remaining = iter(answers)
    prompts: list[str] = []

    def ask(message: str) -> str:
        prompts.append(message)
        return next(remaining)

    console = Console(file=io.StringIO(), width=200)
    error_log = ErrorLog(tmp_path / "error_log.txt")
    OrderMenu(store, console=console, error_log=error_log, ask=ask).run()
    error_log.close()
    return store, console.file.getvalue(), prompts


def sample_store():
    return OrderStore([make_order(1), make_order(2, "Beta", date(2024, 2, 10), "10", "Closed")])


def test_load_and_show(tmp_path: Path):
    path = tmp_path / "orders.csv"
    path.write_text(SAMPLE_CSV, encoding="utf-8")

    store, output, _ = run_menu(tmp_path, ["1", str(path), "3", "9"])

    assert len(store) == 2
    assert "Loaded 2 orders." in output
    assert "Acme" in output
    assert "Beta" in output


def test_non_numeric_and_unknown_choices(tmp_path: Path):
    _, output, _ = run_menu(tmp_path, ["abc", "42", "9"])
    assert "Invalid input. Please enter a number." in output
    assert "Invalid choice. Try again." in output


def test_exit_on_end_of_input(tmp_path: Path):
    def ask(message: str) -> str:
        raise EOFError

    console = Console(file=io.StringIO())
    OrderMenu(OrderStore(), console=console, error_log=ErrorLog(tmp_path / "log.txt"), ask=ask).run()


def test_show_empty_collection(tmp_path: Path):
    _, output, _ = run_menu(tmp_path, ["3", "9"])
    assert "No orders to display." in output


def test_save_with_empty_collection_does_not_prompt_for_path(tmp_path: Path):
    _, output, prompts = run_menu(tmp_path, ["2", "9"])
    assert "No orders to save." in output
    assert prompts == ["Choose an action", "Choose an action"]
    assert list(tmp_path.glob("*.json")) == []


def test_save_writes_file(tmp_path: Path):
    path = tmp_path / "out.xml"
    _, output, _ = run_menu(tmp_path, ["2", str(path), "9"], store=sample_store())
    assert "Orders saved." in output
    assert "<ArrayOfOrder" in path.read_text(encoding="utf-8")


def test_failed_action_is_logged_and_loop_continues(tmp_path: Path):
    _, output, _ = run_menu(tmp_path, ["1", str(tmp_path / "missing.json"), "3", "9"])

    assert "Error:" in output
    assert "not found" in output
    assert "No orders to display." in output
    assert "missing.json not found." in (tmp_path / "error_log.txt").read_text(encoding="utf-8")


def test_add_then_remove(tmp_path: Path):
    store, output, _ = run_menu(
        tmp_path,
        ["6", "5", "Zed", "2024-03-01", "12.5", "New", "3", "7", "5", "9"],
    )
    assert "Order added." in output
    assert "Zed" in output
    assert "Order removed." in output
    assert len(store) == 0


def test_add_with_bad_id_is_reported(tmp_path: Path):
    store, output, _ = run_menu(tmp_path, ["6", "five", "9"])
    assert len(store) == 0
    assert "Error:" in output
    assert "ValueError" in (tmp_path / "error_log.txt").read_text(encoding="utf-8")


def test_add_with_bad_date_adds_nothing(tmp_path: Path):
    store, output, _ = run_menu(tmp_path, ["6", "5", "Zed", "someday", "1", "New", "9"])
    assert len(store) == 0
    assert "Error:" in output


def test_remove_unknown_id(tmp_path: Path):
    store, output, _ = run_menu(tmp_path, ["7", "99", "9"], store=sample_store())
    assert "Order not found." in output
    assert len(store) == 2


def test_edit_blank_keeps_values(tmp_path: Path):
    store, output, _ = run_menu(tmp_path, ["8", "1", "", "", "100", "", "9"], store=sample_store())

    order = store.find(1)
    assert "Order updated." in output
    assert order.amount == Decimal("100")
    assert order.client == "Acme"
    assert order.order_date == date(2024, 1, 5)
    assert order.status == "Open"


def test_edit_all_blank_reports_no_changes(tmp_path: Path):
    store = sample_store()
    before = [o.model_dump() for o in store.list()]

    _, output, _ = run_menu(tmp_path, ["8", "1", "", "", "", "", "9"], store=store)

    assert "No changes." in output
    assert "Order updated." not in output
    assert [o.model_dump() for o in store.list()] == before


def test_edit_unknown_id(tmp_path: Path):
    _, output, prompts = run_menu(tmp_path, ["8", "99", "9"], store=sample_store())
    assert "Order not found." in output
    assert len(prompts) == 3


def test_sort_by_amount(tmp_path: Path):
    store, output, _ = run_menu(tmp_path, ["4", "4", "9"], store=sample_store())
    assert "Orders by amount" in output
    assert output.index("Beta") < output.index("Acme")
    assert [o.id for o in store.list()] == [1, 2]


def test_sort_with_bad_option(tmp_path: Path):
    _, output, _ = run_menu(tmp_path, ["4", "x", "9"], store=sample_store())
    assert "Invalid input." in output


def test_search(tmp_path: Path):
    _, output, _ = run_menu(tmp_path, ["5", "closed", "9"], store=sample_store())
    assert "Found 1 orders." in output
    assert "Beta" in output
