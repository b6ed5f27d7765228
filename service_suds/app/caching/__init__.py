"""
SUDS caching package.

Holds widget init payloads per article and the current session's auth
payload. The storage medium is pluggable: in-process memory or Redis.
"""

from .stores import KeyValueStore, MemoryStore, RedisStore
from .suds_cache import SudsCache

__all__ = ["KeyValueStore", "MemoryStore", "RedisStore", "SudsCache"]
