"""
SUDS client: wires settings, transport, session provider and cache into the
livefyre and user gateways.
"""

from typing import Optional

from shared.config import SudsSettings, get_settings
from shared.logging import get_logger

from .adapters.transport import RemoteCall, HttpxRemoteCall
from .adapters.session import SessionProvider, StaticSessionProvider
from .caching.stores import MemoryStore, RedisStore
from .caching.suds_cache import SudsCache
from .gateway.livefyre import LivefyreGateway
from .gateway.user import UserGateway


class SudsClient:
    """Entry point for callers.

    Every collaborator can be injected; whatever is left out is built from
    ``settings``.
    """

    def __init__(
        self,
        settings: Optional[SudsSettings] = None,
        *,
        remote_call: Optional[RemoteCall] = None,
        session_provider: Optional[SessionProvider] = None,
        cache: Optional[SudsCache] = None,
        metrics=None,
    ):
        self.settings = settings or get_settings()
        self.metrics = metrics
        self.logger = get_logger("suds.client")

        self.remote_call = remote_call or HttpxRemoteCall(
            self.settings.base_url,
            timeout=self.settings.timeout_seconds,
            metrics=metrics
        )
        self.session_provider = session_provider or StaticSessionProvider(None)
        self.cache = cache or SudsCache(self._build_store(), metrics=metrics)

        collaborators = (self.settings, self.remote_call, self.session_provider, self.cache)
        self.livefyre = LivefyreGateway(*collaborators, metrics=metrics)
        self.user = UserGateway(*collaborators, metrics=metrics)

    def _build_store(self):
        if self.settings.cache_backend == "redis":
            self.logger.info("Using Redis cache store", redis_url=self.settings.redis_url)
            return RedisStore(self.settings.redis_url, self.settings.cache_ttl_seconds)
        return MemoryStore(self.settings.cache_ttl_seconds)

    async def aclose(self) -> None:
        """Release the transport and the cache store."""
        await self.remote_call.aclose()
        await self.cache.aclose()

    async def __aenter__(self) -> "SudsClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()
