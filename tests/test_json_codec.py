from __future__ import annotations

import json
from datetime import date
from decimal import Decimal

import pytest

from adapters.codecs import JsonOrderCodec
from core.domain.models import Order
from core.errors import OrderParseError


def make_order(order_id=1, client="Acme", order_date=date(2024, 1, 5), amount="99.50", status="Open"):
    return Order(id=order_id, client=client, order_date=order_date, amount=Decimal(amount), status=status)


def test_encode_layout_and_key_order():
    text = JsonOrderCodec().encode([make_order()])

    data = json.loads(text, parse_float=Decimal)
    assert list(data[0].keys()) == ["id", "client", "orderDate", "amount", "status"]
    assert data[0] == {"id": 1, "client": "Acme", "orderDate": "2024-01-05", "amount": Decimal("99.50"), "status": "Open"}
    assert '"amount": 99.50,' in text
    assert '\n  {\n    "id": 1,' in text


def test_encode_respects_indent():
    text = JsonOrderCodec(indent=4).encode([make_order()])
    assert '\n        "client": "Acme",' in text


def test_round_trip():
    codec = JsonOrderCodec()
    orders = [
        make_order(),
        make_order(2, "Бета ÜML", date(2023, 12, 31), "-0.01", ""),
        make_order(2, "dup id", date(2020, 2, 29), "12345678901234567.89", "Closed"),
    ]
    assert codec.decode(codec.encode(orders)) == orders


def test_large_amount_keeps_every_digit():
    codec = JsonOrderCodec()
    text = codec.encode([make_order(amount="12345678901234567.89")])
    assert '"amount": 12345678901234567.89,' in text
    assert json.loads(text, parse_float=Decimal)[0]["amount"] == Decimal("12345678901234567.89")
    assert codec.decode(text)[0].amount == Decimal("12345678901234567.89")


def test_decode_reads_numbers_as_decimal():
    text = '[{"id": 1, "client": "A", "orderDate": "2024-01-05", "amount": 0.1, "status": "x"}]'
    assert JsonOrderCodec().decode(text)[0].amount == Decimal("0.1")


def test_decode_accepts_string_amount_and_datetime():
    text = '[{"id": 1, "client": "A", "orderDate": "2024-01-05T00:00:00", "amount": "12.30", "status": "x"}]'
    order = JsonOrderCodec().decode(text)[0]
    assert order.amount == Decimal("12.30")
    assert order.order_date == date(2024, 1, 5)


def test_decode_empty_array():
    assert JsonOrderCodec().decode("[]") == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        '{"id": 1}',
        "[1, 2]",
    ],
)
def test_decode_rejects_wrong_shapes(text):
    with pytest.raises(OrderParseError):
        JsonOrderCodec().decode(text)


def test_decode_missing_field_names_record():
    text = (
        '[{"id": 1, "client": "A", "orderDate": "2024-01-05", "amount": 1, "status": "x"},'
        ' {"id": 2, "client": "B", "amount": 1, "status": "x"}]'
    )
    with pytest.raises(OrderParseError) as excinfo:
        JsonOrderCodec().decode(text)
    assert excinfo.value.location == "record 1"


def test_round_trip_keeps_amount_scale():
    codec = JsonOrderCodec()
    order = codec.decode(codec.encode([make_order(amount="99.50")]))[0]
    assert str(order.amount) == "99.50"


def test_amount_is_written_in_positional_notation():
    text = JsonOrderCodec().encode([make_order(amount="1E+2")])
    assert '"amount": 100,' in text
