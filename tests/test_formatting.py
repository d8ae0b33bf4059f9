from datetime import date, datetime
from decimal import Decimal

import pytest

from b1_invoices.models.document import Document
from b1_invoices.utils import (
    PLACEHOLDER,
    aggregate_total,
    format_currency,
    format_date,
    parse_amount,
    parse_date,
)


def test_aggregate_total_counts_absent_as_zero():
    documents = [
        Document(total=Decimal("10.50")),
        Document(total=None),
        Document(total=Decimal("5.00")),
    ]
    assert aggregate_total(documents) == Decimal("15.50")


def test_aggregate_total_rounds_to_cents():
    documents = [Document(total=Decimal("0.105")), Document(total=Decimal("0.100"))]
    assert aggregate_total(documents) == Decimal("0.21")
    assert aggregate_total([]) == Decimal("0.00")


def test_aggregate_total_is_order_independent():
    totals = [Decimal("0.1"), Decimal("0.2"), Decimal("0.3")]
    forward = aggregate_total(Document(total=t) for t in totals)
    backward = aggregate_total(Document(total=t) for t in reversed(totals))
    assert forward == backward == Decimal("0.60")


@pytest.mark.parametrize(
    "amount, expected",
    [
        (1234.5, "$1,234.50"),
        (Decimal("1234567.891"), "$1,234,567.89"),
        (0, "$0.00"),
        (-12, "-$12.00"),
        ("99.999", "$100.00"),
        (None, PLACEHOLDER),
    ],
)
def test_format_currency(amount, expected):
    assert format_currency(amount) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (date(2024, 1, 5), "Jan 5, 2024"),
        (datetime(2024, 12, 25, 13, 30), "Dec 25, 2024"),
        ("2024-03-02", "Mar 2, 2024"),
        ("2024-03-02T00:00:00Z", "Mar 2, 2024"),
        ("3/2/2024", "Mar 2, 2024"),
        (None, PLACEHOLDER),
        ("", PLACEHOLDER),
        ("not a date", PLACEHOLDER),
    ],
)
def test_format_date(value, expected):
    assert format_date(value) == expected


def test_parse_date_accepts_service_layer_timestamps():
    assert parse_date("2024-07-31T00:00:00") == date(2024, 7, 31)
    assert parse_date("07/31/24") == date(2024, 7, 31)


def test_parse_amount():
    assert parse_amount(10.5) == Decimal("10.5")
    assert parse_amount(3) == Decimal("3")
    assert parse_amount(" 7.25 ") == Decimal("7.25")
    assert parse_amount(None) is None
    assert parse_amount("") is None
    with pytest.raises(ValueError):
        parse_amount("ten")
    with pytest.raises(ValueError):
        parse_amount(True)
    with pytest.raises(ValueError):
        parse_amount({"value": 1})
