import asyncio
from dataclasses import replace
from datetime import date
from decimal import Decimal

import pytest

from b1_invoices.models.common import LoadState
from b1_invoices.models.document import (
    AuthFailure,
    Document,
    FetchFailure,
    Session,
    Success,
)
from b1_invoices.services.authenticator import LoginAuthenticator, SessionAuthenticator
from b1_invoices.services.client import RetrievalClient
from b1_invoices.services.errors import AuthError, FetchError, NetworkError
from b1_invoices.services.fetcher import DocumentFetcher

from conftest import DummyResponse, DummySession


class FakeAuthenticator(SessionAuthenticator):
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = 0

    def authenticate(self, config):
        self.calls += 1
        if self.error:
            raise self.error
        return Session(session_token=f"token-{self.calls}", route_id=".node1")


class FakeFetcher:
    def __init__(self, documents=(), error: Exception | None = None):
        self.documents = list(documents)
        self.error = error
        self.calls: list[tuple[str, str]] = []

    def fetch(self, session, customer_id):
        self.calls.append((session.session_token, customer_id))
        if self.error:
            raise self.error
        return list(self.documents)


DOCUMENTS = [
    Document(date=date(2024, 1, 8), number="412", total=Decimal("1530.40")),
    Document(date=date(2024, 2, 14), number="437", total=None),
]


@pytest.mark.parametrize("status", [400, 401, 403, 500, 503])
def test_auth_failure_never_fetches(config, status):
    http = DummySession(post=DummyResponse(status, {"error": {"message": "denied"}}))
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(config, authenticator=LoginAuthenticator(http), fetcher=fetcher)

    result = asyncio.run(client.load())

    assert isinstance(result, AuthFailure)
    assert result.status_code == status
    assert not result.network
    assert fetcher.calls == []
    assert client.state is LoadState.AUTH_FAILED
    assert client.result == result


def test_auth_network_failure_is_flagged(config):
    client = RetrievalClient(
        config,
        authenticator=FakeAuthenticator(NetworkError("unreachable", "auth")),
        fetcher=FakeFetcher(),
    )

    result = asyncio.run(client.load())

    assert result == AuthFailure(reason="unreachable", status_code=None, network=True)


def test_success_returns_documents_in_order(config):
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(config, authenticator=FakeAuthenticator(), fetcher=fetcher)

    result = asyncio.run(client.load("C30000"))

    assert result == Success(tuple(DOCUMENTS))
    assert fetcher.calls == [("token-1", "C30000")]
    assert client.state is LoadState.READY
    assert not client.loading


def test_end_to_end_over_http(config):
    payload = {
        "value": [
            {"DocDate": "2024-01-08", "DocNum": 412, "DocTotal": 10.5},
            {"DocDate": "2024-02-14", "DocNum": 437, "DocTotal": 5},
        ]
    }
    http = DummySession(
        post=DummyResponse(200, {"SessionId": "abc"}, {"Set-Cookie": "ROUTEID=.node4; path=/"}),
        get=DummyResponse(200, payload),
    )
    client = RetrievalClient(
        config,
        authenticator=LoginAuthenticator(http),
        fetcher=DocumentFetcher(config, http),
    )

    result = asyncio.run(client.load())

    assert [doc.number for doc in result.documents] == ["412", "437"]
    assert http.gets[0]["headers"]["Cookie"] == "B1SESSION=abc; ROUTEID=.node4"
    assert "CardCode%20eq%20'C20000'" in http.gets[0]["url"]


@pytest.mark.parametrize("payload", [{}, {"value": None}])
def test_missing_value_is_empty_success(config, payload):
    http = DummySession(
        post=DummyResponse(200, {"SessionId": "abc"}),
        get=DummyResponse(200, payload),
    )
    client = RetrievalClient(
        config,
        authenticator=LoginAuthenticator(http),
        fetcher=DocumentFetcher(config, http),
    )

    assert asyncio.run(client.load()) == Success(())
    assert client.state is LoadState.READY


def test_fetch_failure_is_classified(config):
    client = RetrievalClient(
        config,
        authenticator=FakeAuthenticator(),
        fetcher=FakeFetcher(error=FetchError("Failed to fetch invoices: 500", 500)),
    )

    result = asyncio.run(client.load())

    assert result == FetchFailure(reason="Failed to fetch invoices: 500", status_code=500)
    assert client.state is LoadState.FETCH_FAILED


def test_fetch_network_failure_is_flagged(config):
    client = RetrievalClient(
        config,
        authenticator=FakeAuthenticator(),
        fetcher=FakeFetcher(error=NetworkError("reset", "fetch")),
    )

    result = asyncio.run(client.load())

    assert isinstance(result, FetchFailure)
    assert result.network


def test_failed_cycle_can_be_restarted(config):
    authenticator = FakeAuthenticator(AuthError("Login failed: 401", 401))
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(config, authenticator=authenticator, fetcher=fetcher)

    async def scenario():
        first = await client.load()
        authenticator.error = None
        second = await client.load()
        return first, second

    first, second = asyncio.run(scenario())

    assert isinstance(first, AuthFailure)
    assert isinstance(second, Success)
    assert authenticator.calls == 2
    assert len(fetcher.calls) == 1


def test_post_login_pause_uses_configured_delay(config):
    delays: list[float] = []

    async def fake_sleep(seconds):
        delays.append(seconds)
        assert client.state is LoadState.AUTHENTICATED

    client = RetrievalClient(
        replace(config, post_login_delay_ms=5000),
        authenticator=FakeAuthenticator(),
        fetcher=FakeFetcher(DOCUMENTS),
        sleep=fake_sleep,
    )

    asyncio.run(client.load())

    assert delays == [5.0]


def test_new_load_supersedes_pending_fetch(config):
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(
        replace(config, post_login_delay_ms=200),
        authenticator=FakeAuthenticator(),
        fetcher=fetcher,
    )

    async def scenario():
        first = asyncio.create_task(client.load("C1"))
        # Let the first cycle log in and enter its post-login pause
        for _ in range(50):
            await asyncio.sleep(0.01)
            if client.state is LoadState.AUTHENTICATED:
                break
        assert client.state is LoadState.AUTHENTICATED
        second = await client.load("C2")
        return await first, second

    first, second = asyncio.run(scenario())

    assert first is None
    assert isinstance(second, Success)
    assert [customer for _, customer in fetcher.calls] == ["C2"]
    assert client.result == second
    assert client.state is LoadState.READY


def test_cancel_discards_in_flight_cycle(config):
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(
        replace(config, post_login_delay_ms=200),
        authenticator=FakeAuthenticator(),
        fetcher=fetcher,
    )

    async def scenario():
        task = asyncio.create_task(client.load())
        await asyncio.sleep(0.05)
        client.cancel()
        result = await task
        # Give any stray continuation a chance to run
        await asyncio.sleep(0.3)
        return result

    assert asyncio.run(scenario()) is None
    assert fetcher.calls == []
    assert client.state is LoadState.IDLE
    assert client.result is None


def test_unexpected_error_propagates_and_resets_state(config):
    client = RetrievalClient(
        config,
        authenticator=FakeAuthenticator(),
        fetcher=FakeFetcher(error=KeyError("boom")),
    )

    with pytest.raises(KeyError):
        asyncio.run(client.load())

    assert client.state is LoadState.IDLE


def test_phases_are_published_in_order(config):
    phases = []

    async def on_phase(phase):
        phases.append(phase)

    client = RetrievalClient(
        config, authenticator=FakeAuthenticator(), fetcher=FakeFetcher(DOCUMENTS)
    )

    result = asyncio.run(client.load(on_phase=on_phase))

    assert isinstance(result, Success)
    assert phases == [
        LoadState.AUTHENTICATING,
        LoadState.AUTHENTICATED,
        LoadState.FETCHING,
    ]


def test_failed_login_publishes_only_authenticating(config):
    phases = []

    async def on_phase(phase):
        phases.append(phase)

    client = RetrievalClient(
        config,
        authenticator=FakeAuthenticator(AuthError("denied", 401)),
        fetcher=FakeFetcher(),
    )

    asyncio.run(client.load(on_phase=on_phase))

    assert phases == [LoadState.AUTHENTICATING]


def test_authenticated_phase_is_visible_during_pause(config):
    fetcher = FakeFetcher(DOCUMENTS)
    client = RetrievalClient(
        replace(config, post_login_delay_ms=50),
        authenticator=FakeAuthenticator(),
        fetcher=fetcher,
    )
    seen = []

    async def on_phase(phase):
        # Nothing has been fetched when login success is announced
        seen.append((phase, len(fetcher.calls)))

    asyncio.run(client.load(on_phase=on_phase))

    assert (LoadState.AUTHENTICATED, 0) in seen


def test_close_releases_owned_http_session(config, monkeypatch):
    monkeypatch.setattr("b1_invoices.services.client.requests.Session", DummySession)
    client = RetrievalClient(config)
    http = client.authenticator.http

    assert client.fetcher.http is http

    client.close()

    assert http.closed
    assert client.state is LoadState.IDLE


def test_close_leaves_injected_collaborators_alone(config):
    http = DummySession()
    client = RetrievalClient(
        config,
        authenticator=LoginAuthenticator(http),
        fetcher=DocumentFetcher(config, http),
    )

    client.close()

    assert not http.closed
