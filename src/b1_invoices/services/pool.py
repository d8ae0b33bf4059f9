"""
Per-browser-session RetrievalClient cache.

Each page session gets its own client so one tab never supersedes another
tab's load cycle. The cache is bounded: once it holds max_size clients the
least recently used one is evicted and closed, which cancels its cycle and
releases its requests.Session.
"""

from collections import OrderedDict
from typing import Callable

from b1_invoices.lib import logs
from b1_invoices.services.client import RetrievalClient

LOG = logs.logger(__file__)

DEFAULT_MAX_CLIENTS = 256


class ClientPool:
    """
    Least-recently-used map from session key to RetrievalClient.

    Attributes:
        max_size: Number of clients kept before the oldest is evicted.
    """

    def __init__(
        self,
        factory: Callable[[], RetrievalClient],
        max_size: int = DEFAULT_MAX_CLIENTS,
    ) -> None:
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._factory = factory
        self._clients: OrderedDict[str, RetrievalClient] = OrderedDict()

    def __len__(self) -> int:
        return len(self._clients)

    def __contains__(self, key: str) -> bool:
        return key in self._clients

    def get(self, key: str) -> RetrievalClient:
        """
        Return the client for a session key, creating it on first use.

        Raises:
            ValueError: If the factory cannot build a client (bad config).
        """
        client = self._clients.get(key)
        if client is not None:
            self._clients.move_to_end(key)
            return client

        client = self._factory()
        self._clients[key] = client
        while len(self._clients) > self.max_size:
            evicted_key, evicted = self._clients.popitem(last=False)
            LOG.info("Evicting retrieval client - key:%s", evicted_key)
            evicted.close()
        return client

    def discard(self, key: str) -> None:
        """Drop and close the client for a session key, if present."""
        client = self._clients.pop(key, None)
        if client is not None:
            client.close()

    def close(self) -> None:
        """Close every cached client."""
        while self._clients:
            _, client = self._clients.popitem(last=False)
            client.close()
