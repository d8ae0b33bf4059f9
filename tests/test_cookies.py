import pytest

from b1_invoices.lib.cookies import cookie_header, parse_cookies


def test_parse_cookies_skips_trailing_attribute():
    assert parse_cookies("B1SESSION=abc; ROUTEID=xyz, Path=/") == {
        "B1SESSION": "abc",
        "ROUTEID": "xyz",
    }


def test_parse_cookies_handles_folded_set_cookie_headers():
    header = (
        "B1SESSION=6f1c0b6e-2a47-11ef-8000-0050569e2b1a; HttpOnly; Secure; "
        "SameSite=None, ROUTEID=.node2; path=/b1s"
    )
    assert parse_cookies(header) == {
        "B1SESSION": "6f1c0b6e-2a47-11ef-8000-0050569e2b1a",
        "ROUTEID": ".node2",
    }


def test_parse_cookies_ignores_expires_date_fragments():
    header = "ROUTEID=.node1; Expires=Wed, 21 Oct 2026 07:28:00 GMT; Max-Age=1800"
    assert parse_cookies(header) == {"ROUTEID": ".node1"}


@pytest.mark.parametrize(
    "header",
    [None, "", "   ", "=value", "name=", ";;,,", "justtext"],
)
def test_parse_cookies_malformed_input_yields_nothing(header):
    assert parse_cookies(header) == {}


def test_cookie_header_skips_missing_values():
    assert cookie_header({"B1SESSION": "abc", "ROUTEID": None}) == "B1SESSION=abc"
    assert (
        cookie_header({"B1SESSION": "abc", "ROUTEID": ".node2"})
        == "B1SESSION=abc; ROUTEID=.node2"
    )
