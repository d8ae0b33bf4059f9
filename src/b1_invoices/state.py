"""
Reflex state management for the B1 invoices page.

The state owns no business logic: it asks a RetrievalClient for a load
cycle and copies the DocumentView built from the outcome into plain vars
for the components to render. Each browser session gets its own client from
a bounded ClientPool so a reload in one tab never supersedes another tab's
cycle. The cycle's in-flight phases are published as they happen, so the page
reports a successful login during the post-login pause.
"""

import os

import reflex as rx

from b1_invoices.config import DEFAULT_CUSTOMER_ID
from b1_invoices.lib import logs
from b1_invoices.models.common import LoadState
from b1_invoices.models.document import AuthFailure, FetchFailure
from b1_invoices.models.view import DocumentView, ViewStatus, build_view
from b1_invoices.services import DEFAULT_MAX_CLIENTS, ClientPool, build_retrieval_client
from b1_invoices.utils import PLACEHOLDER

LOG = logs.logger(__file__)

# Configuration from environment
APP_TITLE = os.getenv("B1_INVOICES_TITLE", "Customer Invoices")
DEFAULT_CUSTOMER = os.getenv("B1_CUSTOMER_ID", DEFAULT_CUSTOMER_ID)
MAX_CLIENTS = int(os.getenv("B1_INVOICES_MAX_CLIENTS", str(DEFAULT_MAX_CLIENTS)))

_CLIENTS = ClientPool(build_retrieval_client, max_size=MAX_CLIENTS)


class DocumentState(rx.State):
    """
    Page state for the invoice table.

    Vars mirror DocumentView; rows are plain dicts with date, number and
    total strings.
    """

    customer_id: str = DEFAULT_CUSTOMER
    status: str = ViewStatus.IDLE.value
    message: str = ""
    detail: str = ""
    authenticated: bool = False
    rows: list[dict[str, str]] = []
    total: str = PLACEHOLDER
    count: int = 0

    @rx.var
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING.value

    @rx.var
    def is_error(self) -> bool:
        return self.status in (
            ViewStatus.AUTH_FAILED.value,
            ViewStatus.FETCH_FAILED.value,
        )

    @rx.var
    def is_empty(self) -> bool:
        return self.status == ViewStatus.EMPTY.value

    @rx.var
    def is_ready(self) -> bool:
        return self.status == ViewStatus.READY.value

    @rx.var
    def result_summary(self) -> str:
        noun = "invoice" if self.count == 1 else "invoices"
        return f"{self.count} {noun} for {self.customer_id}"

    @rx.event
    def set_customer_id(self, value: str):
        self.customer_id = value.strip()

    @rx.event(background=True)
    async def on_load(self):
        """
        Run a load cycle for the current customer.

        A newer load for the same browser session supersedes this one; the
        superseded cycle returns None and leaves the page untouched.
        """
        async with self:
            token = self.router.session.client_token
            customer_id = self.customer_id or DEFAULT_CUSTOMER
            self._apply(build_view(None, loading=True))

        try:
            client = _CLIENTS.get(token)
        except ValueError as e:
            LOG.error("Retrieval client is not configured: %s", e)
            async with self:
                self._apply(build_view(AuthFailure(reason=str(e)), loading=False))
            return

        async def publish(phase: LoadState) -> None:
            async with self:
                self._apply(build_view(None, loading=True, phase=phase))

        try:
            result = await client.load(customer_id, on_phase=publish)
        except Exception as e:
            LOG.error("Load failed: %s", e, exc_info=True)
            result = FetchFailure(reason=str(e))

        if result is None:
            return
        async with self:
            self._apply(build_view(result, loading=False))

    def _apply(self, view: DocumentView) -> None:
        """Copy a DocumentView into the state vars."""
        self.status = view.status.value
        self.message = view.message
        self.detail = view.detail
        self.authenticated = view.authenticated
        self.rows = [row.to_dict() for row in view.rows]
        self.total = view.total
        self.count = view.count
