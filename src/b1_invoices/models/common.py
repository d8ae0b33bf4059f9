"""
Shared state models for the B1 invoices client.

LoadState tracks where a RetrievalClient is within a load cycle:

    IDLE -> AUTHENTICATING -> AUTH_FAILED
                           -> AUTHENTICATED -> FETCHING -> FETCH_FAILED
                                                        -> READY
"""

from enum import Enum


class LoadState(str, Enum):
    """Phase of the current load cycle."""

    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    FETCHING = "fetching"
    AUTH_FAILED = "auth_failed"
    FETCH_FAILED = "fetch_failed"
    READY = "ready"

    @property
    def in_flight(self) -> bool:
        """True while a cycle is between login and a terminal state."""
        return self in (
            LoadState.AUTHENTICATING,
            LoadState.AUTHENTICATED,
            LoadState.FETCHING,
        )

    @property
    def terminal(self) -> bool:
        return self in (LoadState.AUTH_FAILED, LoadState.FETCH_FAILED, LoadState.READY)
