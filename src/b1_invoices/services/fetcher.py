"""
Invoice retrieval from the Service Layer.

The fetcher issues a single OData query against the Invoices collection,
selecting DocDate, DocNum and DocTotal for one customer (CardCode). The
session is carried in the Cookie header; the response is a JSON object
whose `value` array holds the matching invoices. Backends omit `value`
(or send null) when nothing matches, which is an empty result.
"""

from typing import Mapping
from urllib.parse import quote

import requests

from b1_invoices.config import ClientConfig
from b1_invoices.lib import logs
from b1_invoices.models.document import Document, Session, deserialize_document
from b1_invoices.services.errors import PHASE_FETCH, FetchError, NetworkError
from b1_invoices.services.responses import error_reason, json_object

LOG = logs.logger(__file__)

SELECT_FIELDS = ("DocDate", "DocNum", "DocTotal")


def invoices_url(config: ClientConfig, customer_id: str) -> str:
    """
    Build the Invoices query URL for a customer.

    Single quotes in the customer id are doubled (OData string literal
    escaping). `$`, `,` and `'` stay literal; spaces are percent-encoded.
    """
    literal = customer_id.replace("'", "''")
    select = ",".join(SELECT_FIELDS)
    filter_expr = quote(f"CardCode eq '{literal}'", safe="'")
    return f"{config.url('Invoices')}?$select={select}&$filter={filter_expr}"


class DocumentFetcher:
    """
    Retrieves one customer's invoices with an established session.

    Attributes:
        config: Client configuration (base URL, timeout, TLS).
        http: requests.Session used for the GET.
    """

    def __init__(
        self, config: ClientConfig, http: requests.Session | None = None
    ) -> None:
        self.config = config
        self.http = http or requests.Session()

    def fetch(self, session: Session, customer_id: str) -> list[Document]:
        """
        Return the customer's invoices in backend order.

        Args:
            session: Session from a SessionAuthenticator.
            customer_id: CardCode to filter on.

        Raises:
            FetchError: On a non-success status or a malformed body.
            NetworkError: If the request gets no HTTP response.
        """
        url = invoices_url(self.config, customer_id)
        LOG.info("Fetching invoices - customer_id:%s", customer_id)
        try:
            response = self.http.get(
                url,
                headers={
                    "Cookie": session.cookie_header(),
                    "Content-Type": "application/json",
                },
                timeout=self.config.request_timeout,
                verify=self.config.verify_tls,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Invoice request failed: {exc}", PHASE_FETCH) from exc

        if not response.ok:
            raise FetchError(
                f"Failed to fetch invoices: {error_reason(response)}",
                response.status_code,
            )

        payload = json_object(response, FetchError, "Invoices")
        entries = payload.get("value")
        if entries is None:
            LOG.info("No invoices - customer_id:%s", customer_id)
            return []
        if not isinstance(entries, list):
            raise FetchError(
                "Invoices response 'value' is not an array", response.status_code
            )

        documents = [self._parse(entry, response.status_code) for entry in entries]
        LOG.info(
            "Fetched %d invoices - customer_id:%s", len(documents), customer_id
        )
        return documents

    @staticmethod
    def _parse(entry: object, status_code: int) -> Document:
        if not isinstance(entry, Mapping):
            raise FetchError("Invoices response holds a non-object entry", status_code)
        try:
            return deserialize_document(entry)
        except ValueError as exc:
            raise FetchError(f"Malformed invoice entry: {exc}", status_code) from exc
