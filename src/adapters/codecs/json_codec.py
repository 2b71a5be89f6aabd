"""JSON codec.

Layout: a pretty-printed array of objects keyed
``id, client, orderDate, amount, status``. `simplejson` reads and writes
numbers as `Decimal`, so ``amount`` stays a JSON number with its exact digits
and scale (``99.50`` is written as ``99.50``).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Sequence

import simplejson
from pydantic import ValidationError

from core.domain.file_format import FileFormat
from core.domain.models import Order, format_amount, format_date
from core.errors import OrderParseError


class JsonOrderCodec:
    """Reads and writes an order list as a JSON array."""

    file_format = FileFormat.JSON

    def __init__(self, *, indent: int = 2) -> None:
        self._indent = indent

    def decode(self, text: str) -> list[Order]:
        try:
            data = simplejson.loads(text, use_decimal=True)
        except simplejson.JSONDecodeError as exc:
            raise OrderParseError(f"Invalid JSON: {exc}") from exc

        if not isinstance(data, list):
            raise OrderParseError(f"Expected a JSON array, got: {type(data).__name__}")

        orders: list[Order] = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise OrderParseError(
                    f"Expected a JSON object, got: {type(item).__name__}",
                    location=f"record {index}",
                )
            try:
                orders.append(Order.model_validate(item))
            except ValidationError as exc:
                raise OrderParseError(str(exc), location=f"record {index}") from exc
        return orders

    def encode(self, orders: Sequence[Order] | None) -> str:
        payload: list[dict[str, Any]] = [
            {
                "id": order.id,
                "client": order.client,
                "orderDate": format_date(order.order_date),
                # Positional notation: 100, not 1E+2.
                "amount": Decimal(format_amount(order.amount)),
                "status": order.status,
            }
            for order in orders or ()
        ]
        return simplejson.dumps(payload, ensure_ascii=False, indent=self._indent, use_decimal=True) + "\n"
