"""
Shared configuration management for the SUDS access layer.
"""

from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


ENDPOINT_FIELDS = {
    "init": "init_path",
    "comment_count": "comment_count_path",
    "comment_counts": "comment_counts_path",
    "get_auth": "get_auth_path",
    "update_user": "update_user_path",
}


class SudsSettings(BaseSettings):
    """Settings for talking to SUDS, read from ``SUDS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SUDS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # Caching of init / auth responses
    cache: bool = Field(default=False)
    cache_backend: str = Field(default="memory", pattern="^(memory|redis)$")
    redis_url: str = Field(default="redis://localhost:6379/0")
    cache_ttl_seconds: Optional[int] = Field(default=None, ge=1)

    # Remote service
    base_url: str = Field(default="https://session-user-data.webservices.ft.com")
    timeout_seconds: float = Field(default=10.0, gt=0)
    init_path: str = Field(default="/v1/livefyre/init")
    comment_count_path: str = Field(default="/v1/livefyre/commentcount")
    comment_counts_path: str = Field(default="/v1/livefyre/commentcounts")
    get_auth_path: str = Field(default="/v1/user/getauth")
    update_user_path: str = Field(default="/v1/user/updateuser")

    # Bulk comment counts
    batch_url_budget: int = Field(default=1000, ge=1)

    def get(self, key: Optional[str] = None) -> Any:
        """Return a single setting, or all of them as a dict when no key is given."""
        if key is None:
            return self.model_dump()
        if key not in type(self).model_fields:
            raise KeyError(key)
        return getattr(self, key)

    def endpoint_path(self, name: str) -> str:
        """Path of a named SUDS endpoint (``init``, ``comment_counts``, ...)."""
        try:
            field_name = ENDPOINT_FIELDS[name]
        except KeyError:
            raise KeyError(f"Unknown SUDS endpoint: {name}") from None
        return getattr(self, field_name)

    def endpoint_url(self, name: str) -> str:
        """Absolute URL of a named SUDS endpoint."""
        return self.base_url.rstrip("/") + self.endpoint_path(name)

    def endpoints(self) -> Dict[str, str]:
        return {name: self.endpoint_path(name) for name in ENDPOINT_FIELDS}


def get_settings(**overrides: Any) -> SudsSettings:
    """Get settings, with keyword overrides taking precedence over the environment."""
    return SudsSettings(**overrides)
