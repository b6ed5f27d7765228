"""
User related SUDS endpoints: auth and settings.
"""

from typing import Any, Dict, Mapping, Optional

from shared.errors import ValidationError, NoDataReceivedError, SudsError, ServiceError

from .base import BaseGateway


class UserGateway(BaseGateway):
    """Auth lookup (optionally cached) and user settings updates."""

    logger_name = "suds.gateway.user"

    async def get_auth(self, config: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Auth payload for the current session.

        ``config`` may carry ``force``: with caching enabled, it skips the
        cached payload but the fresh one is still written back.
        """
        if config is not None and not isinstance(config, Mapping):
            raise TypeError("Auth configuration must be a mapping")
        force = bool(config) and config.get("force") is True

        with self._session_scope() as session_id:
            cache_enabled = self.cache_enabled(session_id)

            if cache_enabled and not force:
                cached = await self.cache.get_auth(session_id)
                if cached:
                    self.logger.debug("Serving auth from cache")
                    return cached

            payload: Dict[str, Any] = {}
            if session_id:
                payload["sessionId"] = session_id

            data = await self._call("get_auth", payload)

            if cache_enabled:
                if isinstance(data, Mapping) and data.get("token"):
                    await self.cache.cache_auth(dict(data), session_id)
                else:
                    await self.cache.remove_auth()

            if data is None or not isinstance(data, Mapping):
                raise NoDataReceivedError("No data received from SUDS.")

            return data

    async def update_user(self, settings: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
        """Save the user's settings.

        Fields: pseudonym, emailcomments, emailreplies, emaillikes,
        emailautofollow. A pseudonym that is blank after trimming is
        rejected locally and never sent.
        """
        if settings is None or not isinstance(settings, Mapping):
            raise ValidationError("Settings not provided.")

        payload = dict(settings)

        if "pseudonym" in payload:
            pseudonym = payload["pseudonym"]
            if isinstance(pseudonym, str):
                pseudonym = pseudonym.strip()
            payload["pseudonym"] = pseudonym
            if not pseudonym:
                self.logger.info("Rejected blank pseudonym")
                raise SudsError("Pseudonym is blank.")

        with self._session_scope() as session_id:
            if session_id:
                payload["sessionId"] = session_id

            data = await self._call("update_user", payload)

        if data is None:
            raise NoDataReceivedError("No data received.")
        if not isinstance(data, Mapping):
            raise ServiceError(details={"unexpected_type": type(data).__name__})

        if data.get("status") == "ok":
            return data
        if data.get("error"):
            self.logger.info("SUDS rejected user settings", error=data["error"])
            raise SudsError(data["error"], details={"status": data.get("status")})
        raise ServiceError(details={"status": data.get("status")})
