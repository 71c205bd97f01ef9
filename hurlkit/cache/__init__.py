"""
Artifact caching for hurlkit.

Installed hurl trees are cached by version, platform and architecture so
repeated runs skip the download.
"""

from .store import CacheService, LocalCacheStore
from .policy import ArtifactCache, make_cache_key

__all__ = [
    "CacheService",
    "LocalCacheStore",
    "ArtifactCache",
    "make_cache_key",
]
