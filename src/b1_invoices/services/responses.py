"""
Helpers for reading Service Layer HTTP responses.

Service Layer errors come back as JSON in one of two shapes depending on
the API version:

    {"error": {"code": -304, "message": {"lang": "en-us", "value": "..."}}}
    {"error": {"code": "301", "message": "..."}}

Payloads are wrapped in benedict for keypath access. Service Layer keys
such as "odata.metadata" contain dots, so "/" is used as the separator.
"""

from typing import Any, Mapping

import requests
from benedict import benedict

from b1_invoices.services.errors import RetrievalError

KEYPATH_SEPARATOR = "/"


def error_reason(response: requests.Response) -> str:
    """
    Describe a failed response for logs and failure results.

    Returns:
        "<status> <reason>", followed by the backend's error message when
        the body carries one.
    """
    base = f"{response.status_code} {response.reason or ''}".strip()
    try:
        payload = response.json()
    except ValueError:
        return base
    if not isinstance(payload, Mapping):
        return base

    try:
        message = _keypaths(payload).get("error/message")
    except ValueError:
        return base
    if isinstance(message, Mapping):
        message = message.get("value")
    return f"{base}: {message}" if message else base


def json_object(
    response: requests.Response,
    error_type: type[RetrievalError],
    what: str,
) -> benedict:
    """
    Decode a response body that must be a JSON object.

    Args:
        response: Successful HTTP response.
        error_type: RetrievalError subclass raised for a malformed body.
        what: Name of the call for the error message (e.g., "Login").

    Raises:
        RetrievalError: Of error_type, if the body is not a JSON object or
            has keys benedict cannot address.
    """
    try:
        payload: Any = response.json()
    except ValueError as exc:
        raise error_type(
            f"{what} response is not valid JSON", response.status_code
        ) from exc
    if not isinstance(payload, Mapping):
        raise error_type(
            f"{what} response is not a JSON object", response.status_code
        )
    try:
        return _keypaths(payload)
    except ValueError as exc:
        # benedict rejects keys containing the keypath separator
        raise error_type(
            f"{what} response has unsupported keys: {exc}", response.status_code
        ) from exc


def _keypaths(payload: Mapping) -> benedict:
    return benedict(dict(payload), keypath_separator=KEYPATH_SEPARATOR)
