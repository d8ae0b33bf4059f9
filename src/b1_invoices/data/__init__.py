"""Static demo fixtures used when no Service Layer is configured."""

from b1_invoices.data.demo_documents import DEMO_DOCUMENTS

__all__ = ["DEMO_DOCUMENTS"]
