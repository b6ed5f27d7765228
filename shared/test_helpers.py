"""
Test helper functions and factory methods for the SUDS access layer.
"""

from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from shared.config import SudsSettings


class TestDataFactory:
    """Factory for SUDS payloads."""

    __test__ = False

    @staticmethod
    def create_init_request(article_id: str = "article-1", element_id: str = "comments-el", **overrides) -> Dict[str, Any]:
        """Init request in wire format."""
        request = {
            "elId": element_id,
            "articleId": article_id,
            "url": f"https://www.ft.com/content/{article_id}",
            "title": f"Article {article_id}",
        }
        request.update(overrides)
        return request

    @staticmethod
    def create_init_payload(article_id: str = "article-1", element_id: str = "comments-el", **overrides) -> Dict[str, Any]:
        """Init payload for a classified article that may host a collection."""
        payload = {
            "siteId": 123456,
            "articleId": article_id,
            "el": element_id,
            "collectionMeta": f"meta-{article_id}",
            "checksum": f"checksum-{article_id}",
        }
        payload.update(overrides)
        return payload

    @staticmethod
    def create_auth_payload(token: Optional[str] = "lf-token", **overrides) -> Dict[str, Any]:
        """Auth payload; pass ``token=None`` for an anonymous-looking one."""
        payload: Dict[str, Any] = {
            "displayName": "reader",
            "expires": 1893456000,
            "settings": {"emailcomments": "never"},
        }
        if token is not None:
            payload["token"] = token
        payload.update(overrides)
        return payload

    @staticmethod
    def create_init_response(article_id: str = "article-1", auth: Optional[Dict[str, Any]] = None, **init_overrides) -> Dict[str, Any]:
        """Full init endpoint response."""
        response: Dict[str, Any] = {
            "init": TestDataFactory.create_init_payload(article_id, **init_overrides)
        }
        if auth is not None:
            response["auth"] = auth
        return response

    @staticmethod
    def create_article_ids(count: int, prefix: str = "article-") -> List[str]:
        return [f"{prefix}{index:04d}" for index in range(count)]


class RecordingRemoteCall:
    """RemoteCall fake that records calls and answers from a responder.

    ``responder`` receives ``(target, payload)`` and returns the response;
    an exception it returns (or raises) is raised to the caller.
    """

    __test__ = False

    def __init__(self, responder: Optional[Callable[[str, Mapping[str, Any]], Any]] = None, response: Any = None):
        self.responder = responder
        self.response = response
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.closed = False

    async def __call__(self, target: str, payload: Mapping[str, Any]) -> Any:
        self.calls.append((target, dict(payload)))
        result = self.responder(target, payload) if self.responder else self.response
        if isinstance(result, BaseException):
            raise result
        return result

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def aclose(self) -> None:
        self.closed = True


class TestEnvironment:
    """Test environment configuration."""

    __test__ = False

    @staticmethod
    def get_settings(**overrides) -> SudsSettings:
        values: Dict[str, Any] = {
            "cache": True,
            "base_url": "https://suds.test",
        }
        values.update(overrides)
        return SudsSettings(**values)
