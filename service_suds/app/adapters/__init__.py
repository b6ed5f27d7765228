"""
Adapters package for the SUDS access layer.

Contains the collaborators the gateways are built on:

- transport: the RemoteCall contract and its httpx implementation
- session: where the current user's session id comes from

Keep adapters thin and side-effect free outside of explicit calls.
"""

from .transport import RemoteCall, HttpxRemoteCall, encode_params
from .session import SessionProvider, StaticSessionProvider, CookieSessionProvider

__all__ = [
    "RemoteCall",
    "HttpxRemoteCall",
    "encode_params",
    "SessionProvider",
    "StaticSessionProvider",
    "CookieSessionProvider",
]
