"""
Session providers: where the current user's SUDS session id comes from.
"""

from typing import Callable, Mapping, Optional, Protocol, Union
from urllib.parse import unquote


DEFAULT_SESSION_COOKIE = "FTSession"


class SessionProvider(Protocol):
    """Returns the current session id, or None for anonymous users."""

    def get_session(self) -> Optional[str]:
        ...


class StaticSessionProvider:
    """Fixed session id, useful for server-side callers and tests."""

    def __init__(self, session_id: Optional[str] = None):
        self.session_id = session_id or None

    def get_session(self) -> Optional[str]:
        return self.session_id


class CookieSessionProvider:
    """Reads the session id from a cookie jar.

    ``cookies`` is either a mapping of cookie names to values, a raw
    ``Cookie`` header string, or a callable returning one of those, so the
    provider can follow a jar that changes between calls.
    """

    def __init__(
        self,
        cookies: Union[Mapping[str, str], str, Callable[[], Union[Mapping[str, str], str]]],
        cookie_name: str = DEFAULT_SESSION_COOKIE,
    ):
        self.cookies = cookies
        self.cookie_name = cookie_name

    def get_session(self) -> Optional[str]:
        jar = self.cookies() if callable(self.cookies) else self.cookies
        if isinstance(jar, str):
            jar = parse_cookie_header(jar)
        value = jar.get(self.cookie_name)
        return value or None


def parse_cookie_header(header: str) -> dict:
    """Parse a ``Cookie`` header into a dict; the first occurrence of a name wins."""
    cookies = {}
    for part in header.split(";"):
        name, sep, value = part.strip().partition("=")
        if not sep or not name:
            continue
        cookies.setdefault(name, unquote(value.strip()))
    return cookies
