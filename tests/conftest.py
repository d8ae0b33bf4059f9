from __future__ import annotations

from typing import Any

import pytest
import requests
from requests.structures import CaseInsensitiveDict

from b1_invoices.config import ClientConfig


class DummyResponse:
    def __init__(
        self,
        status_code: int,
        payload: Any | None = None,
        headers: dict[str, str] | None = None,
        reason: str = "",
    ):
        self.status_code = status_code
        self.reason = reason
        self.headers = CaseInsensitiveDict(headers or {})
        self._payload = payload

    @property
    def ok(self) -> bool:
        return self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class DummySession:
    """Stands in for requests.Session; records every call."""

    def __init__(
        self,
        post: DummyResponse | Exception | None = None,
        get: DummyResponse | Exception | None = None,
    ):
        self._post = post
        self._get = get
        self.posts: list[dict[str, Any]] = []
        self.gets: list[dict[str, Any]] = []
        self.closed = False

    def post(self, url: str, **kwargs):
        self.posts.append({"url": url, **kwargs})
        return self._respond(self._post)

    def get(self, url: str, **kwargs):
        self.gets.append({"url": url, **kwargs})
        return self._respond(self._get)

    def close(self):
        self.closed = True

    @staticmethod
    def _respond(response):
        if isinstance(response, Exception):
            raise response
        if response is None:
            raise requests.ConnectionError("no response configured")
        return response


@pytest.fixture
def config() -> ClientConfig:
    return ClientConfig(
        base_url="https://sl.example.com/b1s/v2/",
        company_db="SBODEMOUS",
        username="manager",
        password="secret",
        customer_id="C20000",
        post_login_delay_ms=0,
    )
