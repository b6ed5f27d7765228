"""
Cache for SUDS init and auth payloads.
"""

from typing import Any, Dict, Optional

from shared.logging import get_logger, mask_session_id
from .stores import KeyValueStore, MemoryStore


INIT_PREFIX = "suds:init:"
AUTH_KEY = "suds:auth"


class SudsCache:
    """Init payloads per article, plus a single auth slot.

    The auth slot is structurally global but records the session id that
    filled it; a lookup from any other session is a miss. This keeps the
    single-slot layout while never serving one session's token to another.
    """

    def __init__(self, store: Optional[KeyValueStore] = None, *, metrics=None):
        self.store = store if store is not None else MemoryStore()
        self.metrics = metrics
        self.logger = get_logger("suds.cache")

    @staticmethod
    def init_key(article_id: Any) -> str:
        return f"{INIT_PREFIX}{article_id}"

    async def get_init(self, article_id: Any) -> Optional[Dict[str, Any]]:
        """Cached init payload for an article."""
        cached = await self.store.get(self.init_key(article_id))
        self._record_lookup("init", cached is not None)
        if cached is not None:
            self.logger.debug("Init cache hit", article_id=article_id)
        return cached

    async def cache_init(self, article_id: Any, init: Dict[str, Any]) -> bool:
        """Store the init payload for an article."""
        stored = await self.store.set(self.init_key(article_id), init)
        self._record_write("init", "set")
        self.logger.debug("Cached init payload", article_id=article_id, stored=stored)
        return stored

    async def get_auth(self, session_id: Optional[str]) -> Optional[Dict[str, Any]]:
        """Cached auth payload, only if it was written for ``session_id``."""
        entry = await self.store.get(AUTH_KEY)
        auth = None
        if entry and session_id and entry.get("sessionId") == session_id:
            auth = entry.get("data")
        elif entry:
            self.logger.debug(
                "Auth cache entry belongs to another session",
                session=mask_session_id(session_id)
            )
        self._record_lookup("auth", auth is not None)
        return auth

    async def cache_auth(self, auth: Dict[str, Any], session_id: Optional[str]) -> bool:
        """Fill the auth slot, replacing whatever was there."""
        stored = await self.store.set(AUTH_KEY, {"sessionId": session_id, "data": auth})
        self._record_write("auth", "set")
        self.logger.debug("Cached auth payload", session=mask_session_id(session_id), stored=stored)
        return stored

    async def remove_auth(self) -> bool:
        """Empty the auth slot."""
        removed = await self.store.remove(AUTH_KEY)
        self._record_write("auth", "remove")
        self.logger.debug("Removed cached auth payload", existed=removed)
        return removed

    async def clear(self) -> None:
        """Drop every init and auth entry."""
        clear = getattr(self.store, "clear", None)
        if clear is not None:
            await clear("suds:")
        else:
            await self.store.remove(AUTH_KEY)
        self.logger.info("SUDS cache cleared")

    async def aclose(self) -> None:
        await self.store.aclose()

    def _record_lookup(self, kind: str, hit: bool) -> None:
        if self.metrics:
            self.metrics.record_cache_lookup(kind, hit)

    def _record_write(self, kind: str, action: str) -> None:
        if self.metrics:
            self.metrics.record_cache_write(kind, action)
