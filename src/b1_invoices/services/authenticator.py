"""
Session authentication strategies for the Service Layer.

Both strategies produce a Session for one load cycle; RetrievalClient does
not know which one is configured:

- LoginAuthenticator posts the credentials to /Login and reads the
  SessionId from the body and the ROUTEID cookie from Set-Cookie.
- StaticSessionAuthenticator wraps a session that was established outside
  the application (B1_AUTH_MODE=session).

Neither strategy caches sessions or retries.
"""

from abc import ABC, abstractmethod

import requests

from b1_invoices.config import AUTH_MODE_SESSION, ClientConfig
from b1_invoices.lib import logs
from b1_invoices.lib.cookies import ROUTE_COOKIE, parse_cookies
from b1_invoices.models.document import Session
from b1_invoices.services.errors import PHASE_AUTH, AuthError, NetworkError
from b1_invoices.services.responses import error_reason, json_object

LOG = logs.logger(__file__)


class SessionAuthenticator(ABC):
    """Produces a fresh Session for each load cycle."""

    @abstractmethod
    def authenticate(self, config: ClientConfig) -> Session:
        """
        Establish a session with the backend.

        Raises:
            AuthError: If the backend rejects the login or returns no session.
            NetworkError: If the request gets no HTTP response.
        """


class LoginAuthenticator(SessionAuthenticator):
    """
    Logs in with the configured company database and credentials.

    Attributes:
        http: requests.Session used for the POST.
    """

    def __init__(self, http: requests.Session | None = None) -> None:
        self.http = http or requests.Session()

    def authenticate(self, config: ClientConfig) -> Session:
        url = config.url("Login")
        LOG.info(
            "Login - url:%s company_db:%s user:%s",
            url,
            config.company_db,
            config.username,
        )
        try:
            response = self.http.post(
                url,
                json={
                    "CompanyDB": config.company_db,
                    "UserName": config.username,
                    "Password": config.password,
                },
                headers={"Content-Type": "application/json"},
                timeout=config.request_timeout,
                verify=config.verify_tls,
            )
        except requests.RequestException as exc:
            raise NetworkError(f"Login request failed: {exc}", PHASE_AUTH) from exc

        if not response.ok:
            raise AuthError(
                f"Login failed: {error_reason(response)}", response.status_code
            )

        payload = json_object(response, AuthError, "Login")
        token = payload.get("SessionId")
        if not token or not isinstance(token, str):
            raise AuthError("Login response has no SessionId", response.status_code)

        cookies = parse_cookies(response.headers.get("Set-Cookie"))
        session = Session(
            session_token=token,
            route_id=cookies.get(ROUTE_COOKIE),
            timeout_minutes=_timeout_minutes(payload.get("SessionTimeout")),
        )
        LOG.info(
            "Login succeeded - route_id:%s timeout_minutes:%s",
            session.route_id,
            session.timeout_minutes,
        )
        return session


class StaticSessionAuthenticator(SessionAuthenticator):
    """Returns the session configured through B1_SESSION_TOKEN/B1_ROUTE_ID."""

    def authenticate(self, config: ClientConfig) -> Session:
        if not config.session_token:
            raise AuthError(
                f"No session token configured for auth_mode={AUTH_MODE_SESSION}"
            )
        return Session(session_token=config.session_token, route_id=config.route_id)


def authenticator_for(
    config: ClientConfig, http: requests.Session | None = None
) -> SessionAuthenticator:
    """Return the authentication strategy selected by config.auth_mode."""
    if config.auth_mode == AUTH_MODE_SESSION:
        return StaticSessionAuthenticator()
    return LoginAuthenticator(http)


def _timeout_minutes(value: object) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
