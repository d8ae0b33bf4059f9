"""Utility functions shared across the B1 invoices package."""

from b1_invoices.utils.formatting import (
    PLACEHOLDER,
    aggregate_total,
    format_currency,
    format_date,
    parse_amount,
    parse_date,
)

__all__ = [
    "PLACEHOLDER",
    "aggregate_total",
    "format_currency",
    "format_date",
    "parse_amount",
    "parse_date",
]
