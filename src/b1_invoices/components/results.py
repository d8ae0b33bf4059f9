"""
Invoice results display component for Reflex.

Renders the loading, error, empty and table states from DocumentState,
plus a login banner once the session is established or rejected.
No component performs network calls.
"""

import reflex as rx

from b1_invoices.models.view import ViewStatus
from b1_invoices.state import DocumentState


def document_results() -> rx.Component:
    """
    Build the results container.

    Returns:
        The results container component.
    """
    return rx.box(
        _login_banner(),
        rx.cond(
            DocumentState.is_loading,
            _loader(),
            rx.cond(
                DocumentState.is_error,
                _error(),
                rx.cond(
                    DocumentState.is_empty,
                    _empty(),
                    rx.cond(DocumentState.is_ready, _table(), rx.fragment()),
                ),
            ),
        ),
        id="results-container",
    )


def _login_banner() -> rx.Component:
    """Show whether login succeeded, ahead of the table or a fetch failure."""
    return rx.cond(
        DocumentState.authenticated,
        rx.badge(
            rx.icon("circle_check", size=14),
            "Login succeeded",
            color_scheme="green",
            variant="soft",
        ),
        rx.cond(
            DocumentState.status == ViewStatus.AUTH_FAILED.value,
            rx.badge(
                rx.icon("circle_x", size=14),
                "Login failed",
                color_scheme="red",
                variant="soft",
            ),
            rx.fragment(),
        ),
    )


def _table() -> rx.Component:
    return rx.box(
        rx.text(DocumentState.result_summary, class_name="muted"),
        rx.table.root(
            rx.table.header(
                rx.table.row(
                    rx.table.column_header_cell("Document Date"),
                    rx.table.column_header_cell("Document Number"),
                    rx.table.column_header_cell("Total", align="right"),
                ),
            ),
            rx.table.body(
                rx.foreach(DocumentState.rows, _row),
                rx.table.row(
                    rx.table.cell("Total", col_span=2, class_name="total-label"),
                    rx.table.cell(
                        DocumentState.total, align="right", class_name="total-value"
                    ),
                ),
            ),
            variant="surface",
            width="100%",
        ),
        class_name="results",
    )


def _row(row: dict) -> rx.Component:
    return rx.table.row(
        rx.table.cell(row["date"]),
        rx.table.cell(row["number"]),
        rx.table.cell(row["total"], align="right"),
    )


def _error() -> rx.Component:
    """Build the error banner for authentication or retrieval failures."""
    return rx.callout.root(
        rx.callout.icon(rx.icon("triangle_alert")),
        rx.callout.text(rx.text.strong(DocumentState.message)),
        rx.cond(
            DocumentState.detail != "",
            rx.callout.text(DocumentState.detail, size="2"),
        ),
        color_scheme="red",
        role="alert",
    )


def _empty() -> rx.Component:
    """Build the empty state when the customer has no invoices."""
    return rx.box(
        rx.icon("file-x", class_name="empty-icon", size=60),
        rx.text(DocumentState.message, class_name="muted"),
        class_name="card empty-state",
    )


def _loader() -> rx.Component:
    """Build the loading indicator shown while a cycle is in flight."""
    return rx.box(
        rx.spinner(size="3"),
        rx.text(DocumentState.message, class_name="muted"),
        class_name="card loading-state",
    )
