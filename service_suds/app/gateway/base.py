"""
Pieces shared by the livefyre and user gateways.
"""

from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from shared.config import SudsSettings
from shared.logging import get_logger, reset_session_context, set_session_context

from ..adapters.transport import RemoteCall
from ..adapters.session import SessionProvider
from ..caching.suds_cache import SudsCache


class BaseGateway:
    """Holds the collaborators and the cache-enablement rule."""

    logger_name = "suds.gateway"

    def __init__(
        self,
        settings: SudsSettings,
        remote_call: RemoteCall,
        session_provider: SessionProvider,
        cache: SudsCache,
        *,
        metrics=None,
    ):
        self.settings = settings
        self.remote_call = remote_call
        self.session_provider = session_provider
        self.cache = cache
        self.metrics = metrics
        self.logger = get_logger(self.logger_name)

    @contextmanager
    def _session_scope(self) -> Iterator[Optional[str]]:
        """Current session id, bound to the log context for the duration of one operation."""
        session_id = self.session_provider.get_session() or None
        token = set_session_context(session_id)
        try:
            yield session_id
        finally:
            reset_session_context(token)

    def cache_enabled(self, session_id: Optional[str]) -> bool:
        """Caching only applies when switched on globally and the user has a session."""
        return self.settings.cache is True and bool(session_id)

    async def _call(self, endpoint: str, payload: Dict[str, Any]) -> Any:
        target = self.settings.endpoint_path(endpoint)
        self.logger.debug("Calling SUDS", endpoint=endpoint, target=target)
        return await self.remote_call(target, payload)
