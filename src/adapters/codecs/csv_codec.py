"""CSV codec.

Plain comma splitting with no quoting or escaping: values that contain a comma
do not survive a round trip. Lines with the wrong number of fields are skipped
without error; a bad value on a well-formed line aborts the decode.
"""

from __future__ import annotations

import logging
import re
from typing import Sequence

from pydantic import ValidationError

from core.domain.file_format import FileFormat
from core.domain.models import Order, format_amount, format_date
from core.errors import OrderParseError

logger = logging.getLogger("order_desk.codecs.csv")

HEADER = "Id,Client,OrderDate,Amount,Status"
FIELD_COUNT = 5

_LINE_BREAK = re.compile(r"[\r\n]")


class CsvOrderCodec:
    """Reads and writes the fixed five-column order CSV."""

    file_format = FileFormat.CSV

    def decode(self, text: str) -> list[Order]:
        lines = [line for line in _LINE_BREAK.split(text.lstrip("\ufeff")) if line]
        orders: list[Order] = []

        # First non-empty line is the header; its content is not checked.
        for line_no, line in enumerate(lines[1:], start=2):
            values = line.split(",")
            if len(values) != FIELD_COUNT:
                logger.debug("Skipping CSV row %d: %d fields", line_no, len(values))
                continue
            record = {
                "id": values[0].strip(),
                "client": values[1],
                "order_date": values[2],
                "amount": values[3],
                "status": values[4],
            }
            try:
                orders.append(Order.model_validate(record))
            except ValidationError as exc:
                raise OrderParseError(str(exc), location=f"row {line_no}") from exc
        return orders

    def encode(self, orders: Sequence[Order] | None) -> str:
        if orders is None:
            return ""

        out = [HEADER]
        for order in orders:
            out.append(
                ",".join(
                    (
                        str(order.id),
                        order.client,
                        format_date(order.order_date),
                        format_amount(order.amount),
                        order.status,
                    )
                )
            )
        return "\n".join(out) + "\n"
