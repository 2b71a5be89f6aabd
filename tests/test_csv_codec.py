from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from adapters.codecs import CsvOrderCodec
from core.domain.models import Order
from core.errors import OrderParseError

SAMPLE = "Id,Client,OrderDate,Amount,Status\n1,Acme,2024-01-05,99.50,Open\n2,Beta,2024-02-10,10,Closed"


def make_order(order_id, client, order_date, amount, status):
    return Order(id=order_id, client=client, order_date=order_date, amount=Decimal(amount), status=status)


def test_decode_sample():
    orders = CsvOrderCodec().decode(SAMPLE)

    assert orders == [
        make_order(1, "Acme", date(2024, 1, 5), "99.50", "Open"),
        make_order(2, "Beta", date(2024, 2, 10), "10", "Closed"),
    ]
    assert str(orders[0].amount) == "99.50"


def test_decode_skips_lines_with_wrong_field_count():
    text = SAMPLE + "\n3,Gamma,2024-03-01,5\n4,Delta,2024-04-01,7,Open,extra"
    orders = CsvOrderCodec().decode(text)
    assert [o.id for o in orders] == [1, 2]


def test_decode_header_is_not_validated():
    orders = CsvOrderCodec().decode("whatever header\n7,Zed,2024-01-01,1,New\n")
    assert [o.id for o in orders] == [7]


def test_decode_handles_crlf_and_blank_lines():
    text = "Id,Client,OrderDate,Amount,Status\r\n\r\n1,Acme,2024-01-05,99.50,Open\r\n\r\n"
    orders = CsvOrderCodec().decode(text)
    assert len(orders) == 1
    assert orders[0].status == "Open"


def test_decode_header_only_or_empty():
    assert CsvOrderCodec().decode("Id,Client,OrderDate,Amount,Status\n") == []
    assert CsvOrderCodec().decode("") == []


@pytest.mark.parametrize(
    "bad_line",
    [
        "x,Acme,2024-01-05,99.50,Open",
        "1,Acme,not-a-date,99.50,Open",
        "1,Acme,2024-01-05,lots,Open",
    ],
)
def test_decode_bad_value_aborts_whole_decode(bad_line):
    text = SAMPLE + "\n" + bad_line
    with pytest.raises(OrderParseError) as excinfo:
        CsvOrderCodec().decode(text)
    assert excinfo.value.location == "row 4"


def test_encode_layout():
    orders = [
        make_order(1, "Acme", date(2024, 1, 5), "99.50", "Open"),
        make_order(2, "Beta", date(2024, 2, 10), "10", "Closed"),
    ]
    assert CsvOrderCodec().encode(orders) == (
        "Id,Client,OrderDate,Amount,Status\n"
        "1,Acme,2024-01-05,99.50,Open\n"
        "2,Beta,2024-02-10,10,Closed\n"
    )


def test_encode_none_and_empty():
    assert CsvOrderCodec().encode(None) == ""
    assert CsvOrderCodec().encode([]) == "Id,Client,OrderDate,Amount,Status\n"


def test_round_trip_without_commas():
    codec = CsvOrderCodec()
    orders = codec.decode(SAMPLE)
    assert codec.decode(codec.encode(orders)) == orders


def test_comma_in_value_breaks_the_line():
    codec = CsvOrderCodec()
    orders = [make_order(1, "Acme, Inc", date(2024, 1, 5), "1", "Open")]
    assert codec.decode(codec.encode(orders)) == []
