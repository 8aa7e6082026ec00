"""Helpers shared by the test modules."""

from http.cookies import SimpleCookie


TEST_SECRET = "test-secret"


def set_cookies(response) -> dict:
    """Parse the Set-Cookie headers of a response into name -> Morsel."""
    morsels = {}
    for header in response.headers.getlist("set-cookie"):
        cookie = SimpleCookie()
        cookie.load(header)
        morsels.update(cookie)
    return morsels


def raw_cookie_value(set_cookie_header: str) -> str:
    """The value of a Set-Cookie header exactly as sent on the wire."""
    return set_cookie_header.split(";", 1)[0].split("=", 1)[1]
