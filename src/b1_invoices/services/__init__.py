"""
Client factory for the B1 invoices UI.

build_retrieval_client() returns a RetrievalClient wired for the configured
kind:

- live: Service Layer over HTTP, configured from B1_* variables
- demo: Static invoices with a fixed session (no backend required)

Configure via the B1_INVOICES_SERVICE environment variable.
"""

import os
from typing import Callable, Dict

from b1_invoices.config import ClientConfig
from b1_invoices.lib import logs
from b1_invoices.services.authenticator import (
    LoginAuthenticator,
    SessionAuthenticator,
    StaticSessionAuthenticator,
)
from b1_invoices.services.client import RetrievalClient
from b1_invoices.services.pool import DEFAULT_MAX_CLIENTS, ClientPool
from b1_invoices.services.demo import DemoDocumentFetcher, demo_config
from b1_invoices.services.errors import AuthError, FetchError, NetworkError, RetrievalError
from b1_invoices.services.fetcher import DocumentFetcher

LOG = logs.logger(__file__)


def _live_client(config: ClientConfig | None) -> RetrievalClient:
    return RetrievalClient(config or ClientConfig.from_env())


def _demo_client(config: ClientConfig | None) -> RetrievalClient:
    config = config or demo_config()
    return RetrievalClient(
        config,
        authenticator=StaticSessionAuthenticator(),
        fetcher=DemoDocumentFetcher(config),
    )


_CLIENT_REGISTRY: Dict[str, Callable[[ClientConfig | None], RetrievalClient]] = {
    "live": _live_client,
    "demo": _demo_client,
}


def build_retrieval_client(
    kind: str | None = None, config: ClientConfig | None = None
) -> RetrievalClient:
    """
    Return a new RetrievalClient of the requested kind.

    Each caller gets its own client so concurrent page sessions never
    supersede each other's load cycles.

    Args:
        kind: "live" or "demo"; defaults to B1_INVOICES_SERVICE, then "live".
        config: Explicit configuration; defaults to the kind's own.

    Raises:
        ValueError: If the kind is unknown or the configuration is invalid.
    """
    resolved_kind = (kind or os.getenv("B1_INVOICES_SERVICE", "live")).lower()
    LOG.info("build_retrieval_client - kind:%s resolved_kind:%s", kind, resolved_kind)
    try:
        factory = _CLIENT_REGISTRY[resolved_kind]
    except KeyError as exc:
        msg = f"Unknown retrieval client kind: {resolved_kind}"
        raise ValueError(msg) from exc
    return factory(config)


__all__ = [
    "AuthError",
    "ClientPool",
    "DEFAULT_MAX_CLIENTS",
    "DocumentFetcher",
    "FetchError",
    "LoginAuthenticator",
    "NetworkError",
    "RetrievalClient",
    "RetrievalError",
    "SessionAuthenticator",
    "StaticSessionAuthenticator",
    "build_retrieval_client",
]
