"""
Display contract between the retrieval client and the UI.

build_view() is a pure function from (RetrievalResult, loading flag, cycle
phase) to a DocumentView holding everything the page renders: a status, a
message, the formatted rows and the formatted aggregate total. Components
never see Decimal, date or HTTP objects.
"""

from dataclasses import dataclass, field
from enum import Enum

from b1_invoices.models.common import LoadState
from b1_invoices.models.document import (
    AuthFailure,
    FetchFailure,
    RetrievalResult,
    Success,
)
from b1_invoices.utils import PLACEHOLDER, aggregate_total, format_currency, format_date

AUTH_FAILED_MESSAGE = "Authentication failed"
FETCH_FAILED_MESSAGE = "Data retrieval failed"
EMPTY_MESSAGE = "No invoices found for this customer."
LOADING_MESSAGE = "Loading invoices..."
SIGNING_IN_MESSAGE = "Signing in..."
LOGIN_SUCCEEDED_MESSAGE = "Login succeeded, loading invoices..."


class ViewStatus(str, Enum):
    """What the results area should show."""

    IDLE = "idle"
    LOADING = "loading"
    AUTH_FAILED = "auth_failed"
    FETCH_FAILED = "fetch_failed"
    EMPTY = "empty"
    READY = "ready"


@dataclass(frozen=True, slots=True)
class DocumentRow:
    """One formatted table row."""

    date: str
    number: str
    total: str

    def to_dict(self) -> dict:
        return {"date": self.date, "number": self.number, "total": self.total}


@dataclass(frozen=True, slots=True)
class DocumentView:
    """
    Everything the results area needs to render.

    Attributes:
        status: Which state to render.
        message: Headline for non-table states; empty when READY or IDLE.
        detail: Failure reason reported by the client, if any.
        authenticated: Whether the cycle got past login, so the page can
                       show a login banner before the table arrives.
        rows: Formatted document rows in backend order.
        total: Formatted aggregate of all document totals.
        count: Number of documents.
    """

    status: ViewStatus = ViewStatus.IDLE
    message: str = ""
    detail: str = ""
    authenticated: bool = False
    rows: tuple[DocumentRow, ...] = field(default_factory=tuple)
    total: str = PLACEHOLDER
    count: int = 0

    @property
    def is_error(self) -> bool:
        return self.status in (ViewStatus.AUTH_FAILED, ViewStatus.FETCH_FAILED)

    def to_dict(self) -> dict:
        """Serialize to a JSON-compatible dictionary."""
        return {
            "status": self.status.value,
            "message": self.message,
            "detail": self.detail,
            "authenticated": self.authenticated,
            "rows": [row.to_dict() for row in self.rows],
            "total": self.total,
            "count": self.count,
        }


def build_view(
    result: RetrievalResult | None,
    loading: bool,
    phase: LoadState | None = None,
) -> DocumentView:
    """
    Build the display model for a retrieval outcome.

    Loading takes precedence over any earlier result so a reload never shows
    stale rows next to a spinner.

    Args:
        result: Outcome of the last completed load cycle, or None.
        loading: Whether a load cycle is in flight.
        phase: In-flight state of that cycle, when known. AUTHENTICATED and
               FETCHING report a successful login while the table loads.

    Returns:
        DocumentView ready for rendering.
    """
    if loading:
        return _loading_view(phase)
    if result is None:
        return DocumentView()

    if isinstance(result, AuthFailure):
        return DocumentView(
            status=ViewStatus.AUTH_FAILED,
            message=AUTH_FAILED_MESSAGE,
            detail=result.reason,
        )
    if isinstance(result, FetchFailure):
        return DocumentView(
            status=ViewStatus.FETCH_FAILED,
            message=FETCH_FAILED_MESSAGE,
            detail=result.reason,
            authenticated=True,
        )
    if not isinstance(result, Success):
        raise TypeError(f"Unknown retrieval result: {result!r}")

    documents = result.documents
    if not documents:
        return DocumentView(
            status=ViewStatus.EMPTY,
            message=EMPTY_MESSAGE,
            authenticated=True,
            total=format_currency(0),
        )
    rows = tuple(
        DocumentRow(
            date=format_date(doc.date),
            number=doc.number or PLACEHOLDER,
            total=format_currency(doc.total),
        )
        for doc in documents
    )
    return DocumentView(
        status=ViewStatus.READY,
        authenticated=True,
        rows=rows,
        total=format_currency(aggregate_total(documents)),
        count=len(rows),
    )


def _loading_view(phase: LoadState | None) -> DocumentView:
    if phase in (LoadState.AUTHENTICATED, LoadState.FETCHING):
        return DocumentView(
            status=ViewStatus.LOADING,
            message=LOGIN_SUCCEEDED_MESSAGE,
            authenticated=True,
        )
    if phase is LoadState.AUTHENTICATING:
        return DocumentView(status=ViewStatus.LOADING, message=SIGNING_IN_MESSAGE)
    return DocumentView(status=ViewStatus.LOADING, message=LOADING_MESSAGE)
