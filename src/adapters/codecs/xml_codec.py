"""XML codec.

Schema (the default layout of a serialized order list)::

    <ArrayOfOrder>
      <Order>
        <Id>1</Id>
        <Client>Acme</Client>
        <OrderDate>2024-01-05T00:00:00</OrderDate>
        <Amount>99.50</Amount>
        <Status>Open</Status>
      </Order>
    </ArrayOfOrder>
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from typing import Sequence

from pydantic import ValidationError

from core.domain.file_format import FileFormat
from core.domain.models import Order, format_amount, format_date
from core.errors import OrderParseError

ROOT_TAG = "ArrayOfOrder"
ITEM_TAG = "Order"

# XML element name -> Order attribute name
_FIELDS: tuple[tuple[str, str], ...] = (
    ("Id", "id"),
    ("Client", "client"),
    ("OrderDate", "order_date"),
    ("Amount", "amount"),
    ("Status", "status"),
)

_XSI = "http://www.w3.org/2001/XMLSchema-instance"
_XSD = "http://www.w3.org/2001/XMLSchema"

# A str has no byte encoding left; a declared "utf-16" would confuse expat.
_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class XmlOrderCodec:
    """Reads and writes an order list as an ``ArrayOfOrder`` document."""

    file_format = FileFormat.XML

    def decode(self, text: str) -> list[Order]:
        body = _DECLARATION.sub("", text.lstrip("\ufeff"), count=1)
        try:
            root = ET.fromstring(body)
        except ET.ParseError as exc:
            raise OrderParseError(f"Invalid XML: {exc}") from exc

        if _local_name(root.tag) != ROOT_TAG:
            raise OrderParseError(f"Expected <{ROOT_TAG}> root element, got <{_local_name(root.tag)}>")

        orders: list[Order] = []
        items = [el for el in root if _local_name(el.tag) == ITEM_TAG]
        for index, item in enumerate(items):
            location = f"record {index}"
            children = {_local_name(child.tag): child for child in item}
            values: dict[str, str] = {}
            for element_name, attr in _FIELDS:
                child = children.get(element_name)
                if child is None:
                    raise OrderParseError(f"Missing <{element_name}> element", location=location)
                values[attr] = child.text or ""
            try:
                orders.append(Order.model_validate(values))
            except ValidationError as exc:
                raise OrderParseError(str(exc), location=location) from exc
        return orders

    def encode(self, orders: Sequence[Order] | None) -> str:
        root = ET.Element(ROOT_TAG, {"xmlns:xsi": _XSI, "xmlns:xsd": _XSD})
        for order in orders or ():
            item = ET.SubElement(root, ITEM_TAG)
            ET.SubElement(item, "Id").text = str(order.id)
            ET.SubElement(item, "Client").text = order.client
            ET.SubElement(item, "OrderDate").text = f"{format_date(order.order_date)}T00:00:00"
            ET.SubElement(item, "Amount").text = format_amount(order.amount)
            ET.SubElement(item, "Status").text = order.status
        ET.indent(root, space="  ")
        body = ET.tostring(root, encoding="unicode")
        return '<?xml version="1.0" encoding="utf-8"?>\n' + body + "\n"
