"""
Failure taxonomy for Service Layer calls.

    RetrievalError
    ├── AuthError      login rejected or login response malformed
    ├── FetchError     retrieval rejected or retrieval response malformed
    └── NetworkError   no HTTP response at all (DNS, refused, timeout, TLS)

NetworkError records the phase it happened in so RetrievalClient can still
classify it as an authentication or a retrieval failure.
"""

PHASE_AUTH = "auth"
PHASE_FETCH = "fetch"


class RetrievalError(Exception):
    """
    Base class for client failures.

    Attributes:
        reason: Human-readable cause.
        status_code: HTTP status when the server answered, otherwise None.
    """

    def __init__(self, reason: str, status_code: int | None = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class AuthError(RetrievalError):
    """The backend rejected the login or returned no session."""


class FetchError(RetrievalError):
    """The backend rejected the retrieval or returned an unusable body."""


class NetworkError(RetrievalError):
    """The request failed below HTTP; no status code is available."""

    def __init__(self, reason: str, phase: str) -> None:
        super().__init__(reason)
        self.phase = phase
