"""
Demo fetcher backed by static in-memory invoices.

This is useful for:
- Local development without a Service Layer instance
- Exercising the UI states (ready, empty) with realistic data

The demo client authenticates with a fixed session token, so the full
load cycle (including the post-login pause) still runs.
"""

from typing import Mapping, Sequence

from b1_invoices.config import AUTH_MODE_SESSION, ClientConfig
from b1_invoices.data import DEMO_DOCUMENTS
from b1_invoices.lib import logs
from b1_invoices.models.document import Document, Session
from b1_invoices.services.fetcher import DocumentFetcher

LOG = logs.logger(__file__)

DEMO_BASE_URL = "demo://service-layer"
DEMO_SESSION_TOKEN = "demo-session"


def demo_config(post_login_delay_ms: int = 500) -> ClientConfig:
    """Return a configuration that needs no backend or credentials."""
    return ClientConfig(
        base_url=DEMO_BASE_URL,
        auth_mode=AUTH_MODE_SESSION,
        session_token=DEMO_SESSION_TOKEN,
        post_login_delay_ms=post_login_delay_ms,
    )


class DemoDocumentFetcher(DocumentFetcher):
    """
    Serves invoices from DEMO_DOCUMENTS instead of the network.

    Unknown customers get an empty list, like a backend with no matches.
    """

    def __init__(
        self,
        config: ClientConfig,
        documents: Mapping[str, Sequence[Document]] | None = None,
    ) -> None:
        # No HTTP session: fixtures never touch the network
        self.config = config
        self.http = None
        self._documents = documents if documents is not None else DEMO_DOCUMENTS

    def fetch(self, session: Session, customer_id: str) -> list[Document]:
        documents = list(self._documents.get(customer_id, ()))
        LOG.info(
            "Demo fetch - customer_id:%s count:%d", customer_id, len(documents)
        )
        return documents
