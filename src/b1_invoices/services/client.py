"""
Authenticate-then-fetch orchestration.

RetrievalClient runs one load cycle at a time:

    IDLE -> AUTHENTICATING -> AUTHENTICATED -> (pause) -> FETCHING -> READY
                 |                                          |
                 +-> AUTH_FAILED                            +-> FETCH_FAILED

Every cycle gets an identifier from a CycleGuard. Starting a new cycle
cancels the in-flight task and bumps the identifier; the old cycle checks
the guard after each suspension point (login, post-login pause, fetch) and
stops without touching `state` or `result` once it is no longer current.
Its load() call returns None.

The blocking requests calls run in the event loop's default executor so
the loop stays responsive while a cycle waits on the network. Nothing is
retried; a failed cycle is restarted by calling load() again.
"""

import asyncio
import functools
from typing import Any, Awaitable, Callable, TypeVar

import requests

from b1_invoices.config import ClientConfig
from b1_invoices.lib import logs
from b1_invoices.lib.cycles import CycleGuard, Sleep
from b1_invoices.models.common import LoadState
from b1_invoices.models.document import (
    AuthFailure,
    FetchFailure,
    RetrievalResult,
    Success,
)
from b1_invoices.services.authenticator import SessionAuthenticator, authenticator_for
from b1_invoices.services.errors import NetworkError, RetrievalError
from b1_invoices.services.fetcher import DocumentFetcher

LOG = logs.logger(__file__)

T = TypeVar("T")

PhaseListener = Callable[[LoadState], Awaitable[None]]


class RetrievalClient:
    """
    Loads a customer's invoices through a fresh Service Layer session.

    Attributes:
        config: Immutable client configuration.
        authenticator: Strategy producing a Session per cycle.
        fetcher: Retrieves documents with that session.
        state: Phase of the current (or last) cycle.
        result: Outcome of the last cycle that ran to completion, or None.
    """

    def __init__(
        self,
        config: ClientConfig,
        authenticator: SessionAuthenticator | None = None,
        fetcher: DocumentFetcher | None = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """
        Initialize the client.

        Args:
            config: Client configuration.
            authenticator: Authentication strategy; defaults to the one
                           selected by config.auth_mode.
            fetcher: Document fetcher; defaults to a DocumentFetcher sharing
                     one requests.Session with the authenticator.
            sleep: Coroutine used for the post-login pause.
        """
        http = requests.Session() if authenticator is None or fetcher is None else None
        self.config = config
        self._http = http
        self.authenticator = authenticator or authenticator_for(config, http)
        self.fetcher = fetcher or DocumentFetcher(config, http)
        self.state = LoadState.IDLE
        self.result: RetrievalResult | None = None
        self._guard = CycleGuard(sleep)
        self._task: asyncio.Task | None = None

    @property
    def loading(self) -> bool:
        """True while a cycle is in flight."""
        return self.state.in_flight

    @property
    def cycle(self) -> int:
        """Identifier of the current cycle."""
        return self._guard.current

    async def load(
        self,
        customer_id: str | None = None,
        on_phase: PhaseListener | None = None,
    ) -> RetrievalResult | None:
        """
        Run a load cycle, superseding any cycle still in flight.

        Args:
            customer_id: CardCode to load; defaults to config.customer_id.
            on_phase: Awaited with each in-flight state (AUTHENTICATING,
                      AUTHENTICATED, FETCHING) the cycle reaches while current.

        Returns:
            The cycle's RetrievalResult, or None if a later load() or
            cancel() superseded it.
        """
        customer_id = customer_id or self.config.customer_id
        self._cancel_task()
        cycle = self._guard.begin()
        LOG.info("Load started - cycle:%d customer_id:%s", cycle, customer_id)

        task = asyncio.create_task(self._run(cycle, customer_id, on_phase))
        self._task = task
        try:
            result = await task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                # The caller itself was cancelled, not superseded
                if self._guard.is_current(cycle):
                    self._guard.invalidate()
                    self.state = LoadState.IDLE
                raise
            LOG.info("Load superseded - cycle:%d", cycle)
            return None
        finally:
            if self._task is task:
                self._task = None

        if not self._guard.is_current(cycle):
            return None
        return result

    def cancel(self) -> None:
        """Abandon the in-flight cycle, if any, and return to IDLE."""
        self._cancel_task()
        self._guard.invalidate()
        self.state = LoadState.IDLE

    def close(self) -> None:
        """Cancel any in-flight cycle and close the HTTP session it opened."""
        self.cancel()
        if self._http is not None:
            self._http.close()
            self._http = None

    async def _run(
        self, cycle: int, customer_id: str, on_phase: PhaseListener | None
    ) -> RetrievalResult | None:
        try:
            return await self._cycle(cycle, customer_id, on_phase)
        except Exception:
            if self._guard.is_current(cycle):
                self.state = LoadState.IDLE
            raise

    async def _cycle(
        self, cycle: int, customer_id: str, on_phase: PhaseListener | None
    ) -> RetrievalResult | None:
        if not await self._advance(cycle, LoadState.AUTHENTICATING, on_phase):
            return None
        try:
            session = await self._call(self.authenticator.authenticate, self.config)
        except RetrievalError as exc:
            LOG.warning("Authentication failed - cycle:%d reason:%s", cycle, exc.reason)
            return self._finish(
                cycle,
                LoadState.AUTH_FAILED,
                AuthFailure(
                    reason=exc.reason,
                    status_code=exc.status_code,
                    network=isinstance(exc, NetworkError),
                ),
            )
        if not await self._advance(cycle, LoadState.AUTHENTICATED, on_phase):
            return None

        if not await self._guard.pause(cycle, self.config.post_login_delay_ms):
            return None

        if not await self._advance(cycle, LoadState.FETCHING, on_phase):
            return None
        try:
            documents = await self._call(self.fetcher.fetch, session, customer_id)
        except RetrievalError as exc:
            LOG.warning("Fetch failed - cycle:%d reason:%s", cycle, exc.reason)
            return self._finish(
                cycle,
                LoadState.FETCH_FAILED,
                FetchFailure(
                    reason=exc.reason,
                    status_code=exc.status_code,
                    network=isinstance(exc, NetworkError),
                ),
            )
        return self._finish(cycle, LoadState.READY, Success(tuple(documents)))

    def _transition(self, cycle: int, state: LoadState) -> bool:
        if not self._guard.is_current(cycle):
            return False
        LOG.debug("cycle:%d %s -> %s", cycle, self.state.value, state.value)
        self.state = state
        return True

    async def _advance(
        self, cycle: int, state: LoadState, on_phase: PhaseListener | None
    ) -> bool:
        if not self._transition(cycle, state):
            return False
        if on_phase is not None:
            await on_phase(state)
        return self._guard.is_current(cycle)

    def _finish(
        self, cycle: int, state: LoadState, result: RetrievalResult
    ) -> RetrievalResult | None:
        if not self._transition(cycle, state):
            return None
        self.result = result
        LOG.info("Load finished - cycle:%d state:%s", cycle, state.value)
        return result

    def _cancel_task(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    @staticmethod
    async def _call(fn: Callable[..., T], *args: Any) -> T:
        return await asyncio.get_running_loop().run_in_executor(
            None, functools.partial(fn, *args)
        )
