"""
Client configuration resolved from the environment.

Backend location and credentials are never part of the source tree; they
are read once at startup from B1_* environment variables (a `.env` file
loaded by the process manager works the same way).

Environment Variables:
    B1_BASE_URL: Service Layer root, e.g. https://host:50000/b1s/v2
    B1_COMPANY_DB, B1_USERNAME, B1_PASSWORD: Login credentials
    B1_CUSTOMER_ID: Default customer (CardCode), "C20000"
    B1_POST_LOGIN_DELAY_MS: Pause between login and fetch, 5000
    B1_REQUEST_TIMEOUT: Per-request timeout in seconds, 30
    B1_AUTH_MODE: "login" (default) or "session"
    B1_SESSION_TOKEN, B1_ROUTE_ID: Pre-established session for "session" mode
    B1_VERIFY_TLS: Verify the backend certificate, true
"""

import os
from dataclasses import dataclass, field
from typing import Mapping

AUTH_MODE_LOGIN = "login"
AUTH_MODE_SESSION = "session"
AUTH_MODES = (AUTH_MODE_LOGIN, AUTH_MODE_SESSION)

DEFAULT_CUSTOMER_ID = "C20000"
DEFAULT_POST_LOGIN_DELAY_MS = 5000
DEFAULT_REQUEST_TIMEOUT = 30.0

_TRUE_VALUES = {"1", "true", "yes"}


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """
    Immutable settings for one RetrievalClient.

    Attributes:
        base_url: Service Layer root URL without a trailing slash.
        company_db: Company database to log into.
        username: Service Layer user.
        password: Service Layer password. Masked in repr().
        customer_id: CardCode used when load() gets no customer.
        post_login_delay_ms: Pause between login and fetch.
        auth_mode: "login" to call /Login, "session" to reuse session_token.
        session_token: Pre-established B1SESSION value for "session" mode.
        route_id: ROUTEID matching session_token, if the backend shards.
        request_timeout: Seconds before an HTTP call is abandoned.
        verify_tls: Whether to verify the backend TLS certificate.
    """

    base_url: str
    company_db: str = ""
    username: str = ""
    password: str = field(default="", repr=False)
    customer_id: str = DEFAULT_CUSTOMER_ID
    post_login_delay_ms: int = DEFAULT_POST_LOGIN_DELAY_MS
    auth_mode: str = AUTH_MODE_LOGIN
    session_token: str | None = field(default=None, repr=False)
    route_id: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    verify_tls: bool = True

    def __post_init__(self) -> None:
        if not self.base_url:
            raise ValueError("base_url is required")
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.auth_mode not in AUTH_MODES:
            raise ValueError(
                f"Unknown auth_mode: {self.auth_mode} (expected one of {AUTH_MODES})"
            )
        if self.auth_mode == AUTH_MODE_LOGIN:
            missing = [
                name
                for name in ("company_db", "username", "password")
                if not getattr(self, name)
            ]
            if missing:
                raise ValueError(f"Login mode requires: {', '.join(missing)}")
        if self.post_login_delay_ms < 0:
            raise ValueError("post_login_delay_ms must not be negative")
        if self.request_timeout <= 0:
            raise ValueError("request_timeout must be positive")

    def url(self, path: str) -> str:
        """Return the absolute URL for a Service Layer resource."""
        return f"{self.base_url}/{path.lstrip('/')}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "ClientConfig":
        """
        Build a configuration from B1_* environment variables.

        Args:
            environ: Mapping to read instead of os.environ (for tests).

        Raises:
            ValueError: If a required variable is missing or a value is
                        malformed.
        """
        env = os.environ if environ is None else environ

        def _get(key: str, default: str = "") -> str:
            return (env.get(key) or default).strip()

        try:
            delay_ms = int(_get("B1_POST_LOGIN_DELAY_MS", str(DEFAULT_POST_LOGIN_DELAY_MS)))
            timeout = float(_get("B1_REQUEST_TIMEOUT", str(DEFAULT_REQUEST_TIMEOUT)))
        except ValueError as exc:
            raise ValueError(f"Invalid numeric B1_* setting: {exc}") from exc

        return cls(
            base_url=_get("B1_BASE_URL"),
            company_db=_get("B1_COMPANY_DB"),
            username=_get("B1_USERNAME"),
            password=env.get("B1_PASSWORD") or "",
            customer_id=_get("B1_CUSTOMER_ID", DEFAULT_CUSTOMER_ID),
            post_login_delay_ms=delay_ms,
            auth_mode=_get("B1_AUTH_MODE", AUTH_MODE_LOGIN).lower(),
            session_token=_get("B1_SESSION_TOKEN") or None,
            route_id=_get("B1_ROUTE_ID") or None,
            request_timeout=timeout,
            verify_tls=_get("B1_VERIFY_TLS", "true").lower() in _TRUE_VALUES,
        )
