"""
Parsing and display formatting for invoice documents.

Provides helpers for:
- Date parsing (Service Layer ISO timestamps and m/d/y strings)
- Amount parsing into Decimal
- Date and currency formatting for display
- Aggregating document totals

All functions are pure and perform no I/O.
"""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from b1_invoices.models.document import Document

PLACEHOLDER = "-"
CURRENCY_SYMBOL = "$"

_CENTS = Decimal("0.01")


def parse_date(value: str | date | None) -> date | None:
    """
    Parse a document date into a calendar date.

    Args:
        value: ISO date or timestamp (e.g., "2024-12-25",
               "2024-12-25T00:00:00Z"), m/d/y string (e.g., "12/25/2024"),
               or an existing date/datetime.

    Returns:
        date if parsing succeeds, None otherwise
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if value:
        value = value.strip()
    if not value:
        return None

    # Service Layer sends ISO dates, optionally with a time part
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in ("%m/%d/%Y", "%m/%d/%y"):
        try:
            return datetime.strptime(value, fmt).date()
        except ValueError:
            pass

    return None


def parse_amount(value: object) -> Decimal | None:
    """
    Convert a JSON amount into a Decimal.

    Floats go through str() so 10.5 becomes Decimal("10.5") rather than
    its binary expansion.

    Raises:
        ValueError: If the value is neither numeric nor a numeric string.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError(f"Not an amount: {value!r}")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)):
        return Decimal(str(value))
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return Decimal(value.strip())
        except InvalidOperation as exc:
            raise ValueError(f"Not an amount: {value!r}") from exc
    raise ValueError(f"Not an amount: {value!r}")


def format_date(value: str | date | None) -> str:
    """
    Format a document date for display.

    Returns:
        Date like 'Jan 5, 2024' (day not zero-padded), or the placeholder
        when absent or unparseable.
    """
    parsed = parse_date(value)
    if not parsed:
        return PLACEHOLDER
    return f"{parsed:%b} {parsed.day}, {parsed.year}"


def format_currency(amount: Decimal | float | int | None) -> str:
    """
    Format an amount as US dollars.

    Args:
        amount: Numeric amount, or None.

    Returns:
        Formatted string like '$1,234.50' or '-$12.00', or the placeholder
        when the amount is absent.
    """
    if amount is None:
        return PLACEHOLDER
    value = _to_cents(parse_amount(amount))
    sign = "-" if value < 0 else ""
    return f"{sign}{CURRENCY_SYMBOL}{abs(value):,.2f}"


def aggregate_total(documents: Iterable["Document"]) -> Decimal:
    """
    Sum document totals, counting absent totals as zero.

    Returns:
        Decimal rounded half-up to two decimal places.
    """
    total = sum((doc.total for doc in documents if doc.total is not None), Decimal(0))
    return _to_cents(total)


def _to_cents(value: Decimal) -> Decimal:
    return value.quantize(_CENTS, rounding=ROUND_HALF_UP)
