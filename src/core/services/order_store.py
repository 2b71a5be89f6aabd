"""In-memory order collection and its operations.

The store owns the one mutable list of orders. The CLI creates a single
`OrderStore` and passes it to every action; nothing here prints or prompts,
so the same operations serve the interactive menu, the one-shot commands and
the tests.
"""

from __future__ import annotations

import logging
import os
import tempfile
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Iterable, Iterator

from adapters.codecs import codec_for
from core.domain.file_format import FileFormat
from core.domain.models import Order, OrderPatch
from core.domain.outcomes import Outcome
from core.errors import OrderFileNotFoundError

logger = logging.getLogger("order_desk.store")


class SortKey(str, Enum):
    """Fields an order list can be sorted by."""

    ID = "id"
    CLIENT = "client"
    DATE = "date"
    AMOUNT = "amount"
    STATUS = "status"

    @classmethod
    def parse(cls, value: "SortKey | str") -> "SortKey | None":
        if isinstance(value, SortKey):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return None


_SORT_FIELDS: dict[SortKey, Callable[[Order], Any]] = {
    SortKey.ID: lambda o: o.id,
    SortKey.CLIENT: lambda o: o.client,
    SortKey.DATE: lambda o: o.order_date,
    SortKey.AMOUNT: lambda o: o.amount,
    SortKey.STATUS: lambda o: o.status,
}


def _write_atomic(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class OrderStore:
    """Ordered, in-memory list of orders.

    Insertion order is the default display and save order. Ids are not
    required to be unique; lookups act on the first match.
    """

    def __init__(self, orders: Iterable[Order] | None = None, *, json_indent: int = 2) -> None:
        self._orders: list[Order] = list(orders or ())
        self._json_indent = json_indent

    def __len__(self) -> int:
        return len(self._orders)

    def __iter__(self) -> Iterator[Order]:
        return iter(list(self._orders))

    def load(self, path: str | Path) -> int:
        """Replace the collection with the content of `path`.

        Raises `OrderFileNotFoundError`, `UnsupportedFormatError` or
        `OrderParseError`; on failure the current collection is kept.
        """

        path = Path(path)
        if not path.is_file():
            raise OrderFileNotFoundError(path)

        fmt = FileFormat.from_path(path)
        text = path.read_text(encoding="utf-8-sig")
        orders = codec_for(fmt, json_indent=self._json_indent).decode(text)

        self._orders = orders
        logger.info("Loaded %d orders from %s (%s)", len(orders), path, fmt.label())
        return len(orders)

    def save(self, path: str | Path) -> Outcome:
        """Write the collection to `path`, format chosen by extension.

        Returns `Outcome.EMPTY` without touching the file system when there is
        nothing to save.
        """

        if not self._orders:
            logger.info("Nothing to save")
            return Outcome.EMPTY

        path = Path(path)
        fmt = FileFormat.from_path(path)
        content = codec_for(fmt, json_indent=self._json_indent).encode(self._orders)
        _write_atomic(path, content)
        logger.info("Saved %d orders to %s (%s)", len(self._orders), path, fmt.label())
        return Outcome.OK

    def list(self) -> list[Order]:
        return list(self._orders)

    def sort_by(self, key: SortKey | str) -> list[Order]:
        """Stable ascending sort; the stored order is left as is.

        An unknown key returns the collection in its current order.
        """

        sort_key = SortKey.parse(key)
        if sort_key is None:
            logger.debug("Unknown sort key %r, keeping current order", key)
            return list(self._orders)
        return sorted(self._orders, key=_SORT_FIELDS[sort_key])

    def search(self, term: str) -> list[Order]:
        """Orders where any field's text contains `term`, case-insensitive."""

        needle = (term or "").lower()
        return [order for order in self._orders if any(needle in text for text in order.search_texts())]

    def add(self, order: Order) -> None:
        self._orders.append(order)
        logger.debug("Added order %s", order.id)

    def find(self, order_id: int) -> Order | None:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    def remove(self, order_id: int) -> Outcome:
        for index, order in enumerate(self._orders):
            if order.id == order_id:
                del self._orders[index]
                logger.debug("Removed order %s", order_id)
                return Outcome.OK
        return Outcome.NOT_FOUND

    def edit(self, order_id: int, patch: OrderPatch) -> Outcome:
        """Overwrite the patched fields of the first order with `order_id`."""

        order = self.find(order_id)
        if order is None:
            return Outcome.NOT_FOUND
        patch.apply_to(order)
        logger.debug("Edited order %s: %s", order_id, sorted(patch.changes()))
        return Outcome.OK
