"""
Reflex application entry point for the B1 invoices page.

This module initializes the Reflex app and defines the page layout. The
first load cycle starts when the page loads.
"""

import os

import reflex as rx

from b1_invoices.components import customer_panel, document_results
from b1_invoices.lib import logs
from b1_invoices.state import APP_TITLE, DocumentState

LOG = logs.logger(__file__)

# Configuration from environment
APP_PORT = int(os.getenv("B1_INVOICES_PORT", "8000"))
LOG.info(
    "B1_INVOICES_SERVICE: %s", os.environ.get("B1_INVOICES_SERVICE", "live")
)


def page_header() -> rx.Component:
    """Build the title bar at the top of the page."""
    return rx.box(
        rx.heading(APP_TITLE, size="6", as_="h1"),
        class_name="page-header",
    )


def index() -> rx.Component:
    """
    Build the main page layout.

    Returns:
        The complete page component with header, customer panel and results.
    """
    return rx.box(
        rx.box(
            page_header(),
            customer_panel(),
            document_results(),
            class_name="app-container",
        ),
        class_name="app-shell",
    )


app = rx.App(
    theme=rx.theme(
        appearance="light",
        has_background=True,
        radius="large",
    ),
)

app.add_page(
    index,
    title=APP_TITLE,
    on_load=DocumentState.on_load,
)


def main() -> None:
    """Entrypoint used by `b1-invoices`; runs `reflex run` on APP_PORT."""
    import subprocess
    import sys

    subprocess.run([sys.executable, "-m", "reflex", "run", "--frontend-port", str(APP_PORT)])


if __name__ == "__main__":
    main()
