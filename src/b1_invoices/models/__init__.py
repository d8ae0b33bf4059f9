"""
Data models for the B1 invoices client.

This package provides:
- Session and Document models plus the RetrievalResult variants
- LoadState, the phases of a load cycle
- DocumentView, the display contract consumed by the UI

All models are dataclasses or enums.
"""

from b1_invoices.models.common import LoadState
from b1_invoices.models.document import (
    AuthFailure,
    Document,
    FetchFailure,
    RetrievalResult,
    Session,
    Success,
    deserialize_document,
    serialize_document,
)
from b1_invoices.models.view import DocumentRow, DocumentView, ViewStatus, build_view

__all__ = [
    "AuthFailure",
    "Document",
    "DocumentRow",
    "DocumentView",
    "FetchFailure",
    "LoadState",
    "RetrievalResult",
    "Session",
    "Success",
    "ViewStatus",
    "build_view",
    "deserialize_document",
    "serialize_document",
]
