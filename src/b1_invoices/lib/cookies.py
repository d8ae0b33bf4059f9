"""
Cookie helpers for the Service Layer session protocol.

The Service Layer answers a login with a `Set-Cookie` header carrying the
session cookie and, behind a load balancer, a routing cookie. HTTP clients
fold repeated `Set-Cookie` headers into a single comma-separated value, so
the parser has to cope with several assignments and their attributes mixed
together in one string.
"""

import re
from typing import Mapping

SESSION_COOKIE = "B1SESSION"
ROUTE_COOKIE = "ROUTEID"

# Attributes that may follow a cookie assignment; never cookie names
_ATTRIBUTES = frozenset(
    {
        "domain",
        "expires",
        "httponly",
        "max-age",
        "partitioned",
        "path",
        "priority",
        "samesite",
        "secure",
    }
)

_SEPARATORS = re.compile(r"[;,]")


def parse_cookies(header: str | None) -> dict[str, str]:
    """
    Parse a composite `Set-Cookie` value into name/value pairs.

    Every `;` or `,` separated segment of the form `name=value` is kept.
    Segments without a name or value, cookie attributes (`Path`, `Expires`,
    ...) and fragments of attribute values are skipped silently.

    Args:
        header: Raw header value, or None when the response had none.

    Returns:
        Mapping of cookie names to values in header order.
    """
    cookies: dict[str, str] = {}
    if not header:
        return cookies

    for segment in _SEPARATORS.split(header):
        name, sep, value = segment.strip().partition("=")
        name, value = name.strip(), value.strip()
        if not sep or not name or not value:
            continue
        if name.lower() in _ATTRIBUTES:
            continue
        cookies[name] = value
    return cookies


def cookie_header(cookies: Mapping[str, str | None]) -> str:
    """Join cookies into a `Cookie` request header, skipping empty values."""
    return "; ".join(f"{name}={value}" for name, value in cookies.items() if value)
