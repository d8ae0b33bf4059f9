"""
Invoice document and session models.

This module defines the data exchanged between the Service Layer client
and the presentation layer:

    Session            server-issued credential for one load cycle
    Document           one invoice row (date, number, total)
    RetrievalResult    Success | AuthFailure | FetchFailure

Serialization helpers convert documents between the Service Layer JSON
shape (DocDate, DocNum, DocTotal) and the dataclasses.
"""

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Mapping, Sequence, TypeAlias

from b1_invoices.lib.cookies import ROUTE_COOKIE, SESSION_COOKIE, cookie_header
from b1_invoices.utils import parse_amount, parse_date


@dataclass(frozen=True, slots=True)
class Session:
    """
    Credential returned by a successful login.

    Attributes:
        session_token: Value of the B1SESSION cookie. Never empty.
        route_id: Value of the ROUTEID cookie when the backend shards
                  sessions across nodes.
        established_at: When the session was obtained (UTC).
        timeout_minutes: Session lifetime reported by the backend, if any.
    """

    session_token: str
    route_id: str | None = None
    established_at: dt.datetime = field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )
    timeout_minutes: int | None = None

    def __post_init__(self) -> None:
        if not self.session_token:
            raise ValueError("session_token must not be empty")

    def cookie_header(self) -> str:
        """Return the `Cookie` header that authorizes follow-up requests."""
        return cookie_header(
            {SESSION_COOKIE: self.session_token, ROUTE_COOKIE: self.route_id}
        )

    def __repr__(self) -> str:
        return (
            f"Session(session_token='***', route_id={self.route_id!r}, "
            f"established_at={self.established_at.isoformat()})"
        )


@dataclass(frozen=True, slots=True)
class Document:
    """A single invoice as returned by the Invoices endpoint."""

    date: dt.date | None = None
    number: str | None = None
    total: Decimal | None = None


@dataclass(frozen=True, slots=True)
class Success:
    """Documents retrieved for the customer, in backend order."""

    documents: Sequence[Document] = ()


@dataclass(frozen=True, slots=True)
class AuthFailure:
    """
    The login phase failed; no fetch was attempted.

    Attributes:
        reason: Human-readable cause.
        status_code: HTTP status when the server rejected the request.
        network: True when the request never got a response.
    """

    reason: str
    status_code: int | None = None
    network: bool = False


@dataclass(frozen=True, slots=True)
class FetchFailure:
    """The retrieval phase failed after a successful login."""

    reason: str
    status_code: int | None = None
    network: bool = False


RetrievalResult: TypeAlias = Success | AuthFailure | FetchFailure


def deserialize_document(payload: Mapping[str, Any]) -> Document:
    """
    Convert a Service Layer invoice entry into a Document.

    Raises:
        ValueError: If DocTotal is present but not numeric.
    """
    number = payload.get("DocNum")
    return Document(
        date=parse_date(payload.get("DocDate")),
        number=str(number) if number is not None and number != "" else None,
        total=parse_amount(payload.get("DocTotal")),
    )


def serialize_document(document: Document) -> dict:
    """Convert a Document back into the Service Layer JSON shape."""
    return {
        "DocDate": document.date.isoformat() if document.date else None,
        "DocNum": document.number,
        "DocTotal": str(document.total) if document.total is not None else None,
    }
