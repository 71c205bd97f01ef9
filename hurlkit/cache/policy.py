"""
Best-effort artifact caching.

Wraps a CacheService so that cache problems can never fail an installation:
restore errors become a cache miss, save errors are logged and ignored.
"""

import logging
from pathlib import Path
from typing import Optional

from hurlkit.cache.store import CacheService, LocalCacheStore

logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "hurl-cache"


def make_cache_key(version: str, platform: str, arch: str) -> str:
    """
    Build the cache key of an installed hurl tree.

    Example:
        >>> make_cache_key("4.3.0", "linux", "x64")
        'hurl-cache-4.3.0-linux-x64'
    """
    return f"{CACHE_KEY_PREFIX}-{version}-{platform}-{arch}"


class ArtifactCache:
    """
    Cache policy used by the acquisition pipeline.

    Example:
        >>> cache = ArtifactCache()
        >>> if not cache.restore(install_dir, key):
        ...     install_fresh(install_dir)
        ...     cache.save(install_dir, key)
    """

    def __init__(self, service: Optional[CacheService] = None, enabled: bool = True):
        """
        Initialize cache policy.

        Args:
            service: Underlying cache service (local store if None)
            enabled: When False, restore and save do nothing
        """
        self.enabled = enabled
        self._service = service

    @property
    def service(self) -> CacheService:
        if self._service is None:
            self._service = LocalCacheStore()
        return self._service

    def restore(self, install_dir: Path, key: str) -> bool:
        """
        Try to restore ``install_dir`` from the cache.

        Returns:
            True on a cache hit, False on a miss, when disabled, or on error
        """
        if not self.enabled:
            logger.debug("Cache disabled, skipping restore")
            return False

        try:
            return self.service.restore([install_dir], key) is not None
        except Exception as e:
            logger.warning(f"Failed to restore {key} from cache: {e}")
            return False

    def save(self, install_dir: Path, key: str) -> bool:
        """
        Try to save ``install_dir`` to the cache.

        Returns:
            True when saved, False when disabled or on error
        """
        if not self.enabled:
            logger.debug("Cache disabled, skipping save")
            return False

        try:
            self.service.save([install_dir], key)
        except Exception as e:
            logger.warning(f"Failed to save {key} to cache: {e}")
            return False

        logger.debug(f"Saved {install_dir} to cache as {key}")
        return True


__all__ = [
    "CACHE_KEY_PREFIX",
    "make_cache_key",
    "ArtifactCache",
]
