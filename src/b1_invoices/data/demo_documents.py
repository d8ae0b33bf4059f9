"""Static invoice fixtures served by the demo client, keyed by CardCode."""

from datetime import date
from decimal import Decimal

from b1_invoices.models.document import Document

DEMO_DOCUMENTS: dict[str, list[Document]] = {
    "C20000": [
        Document(date=date(2024, 1, 8), number="412", total=Decimal("1530.40")),
        Document(date=date(2024, 2, 14), number="437", total=Decimal("289.99")),
        Document(date=date(2024, 3, 2), number="455", total=Decimal("12450.00")),
        Document(date=date(2024, 3, 28), number="471", total=None),
        Document(date=date(2024, 5, 19), number="503", total=Decimal("76.25")),
    ],
    "C30000": [
        Document(date=date(2024, 4, 11), number="488", total=Decimal("5400.00")),
    ],
}
