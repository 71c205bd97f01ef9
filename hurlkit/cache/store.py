"""
Persistent key-addressed artifact cache.

This module provides the cache service behind ArtifactCache: directory trees
are saved under a key and restored later by the same key. Entries live
under ``<cache dir>/entries/`` and are tracked in ``index.json``; concurrent
processes are serialised with a file lock on the index.
"""

import hashlib
import json
import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Union

from filelock import FileLock, Timeout

from hurlkit.core.directory import get_artifact_cache_dir
from hurlkit.core.exceptions import CacheServiceError
from hurlkit.core.filesystem import (
    FilesystemError,
    atomic_write,
    copy_path,
    move_path,
    remove_path,
    safe_rmtree,
    temporary_directory,
)

logger = logging.getLogger(__name__)

INDEX_VERSION = 1


class CacheService(ABC):
    """Abstract interface for a key-addressed cache of directory trees."""

    @abstractmethod
    def restore(self, paths: Sequence[Path], key: str) -> Optional[str]:
        """
        Restore ``paths`` from the entry stored under ``key``.

        Returns:
            The matched key on a hit, None on a miss
        """
        pass

    @abstractmethod
    def save(self, paths: Sequence[Path], key: str) -> None:
        """Store ``paths`` under ``key``, replacing any previous entry."""
        pass


def _entry_id(key: str) -> str:
    """Filesystem-safe identifier of a cache key."""
    return hashlib.sha256(key.encode("utf-8")).hexdigest()[:32]


class LocalCacheStore(CacheService):
    """
    Cache service backed by a local directory.

    Example:
        >>> store = LocalCacheStore()
        >>> store.save([Path('/tmp/hurl-4.3.0')], 'hurl-cache-4.3.0-linux-x64')
        >>> store.restore([Path('/tmp/hurl-4.3.0')], 'hurl-cache-4.3.0-linux-x64')
        'hurl-cache-4.3.0-linux-x64'
    """

    def __init__(
        self, cache_dir: Optional[Union[str, Path]] = None, lock_timeout: int = 30
    ):
        """
        Initialize cache store.

        Args:
            cache_dir: Cache root directory (default: ~/.hurlkit/cache)
            lock_timeout: Timeout in seconds for acquiring the index lock
        """
        self.cache_dir = get_artifact_cache_dir(cache_dir)
        self.entries_dir = self.cache_dir / "entries"
        self.index_path = self.cache_dir / "index.json"
        self.lock_path = self.cache_dir / "lock" / "index.lock"
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized cache store at {self.cache_dir}")

    # ------------------------------------------------------------------
    # Index handling
    # ------------------------------------------------------------------

    def _empty_index(self) -> dict:
        return {"version": INDEX_VERSION, "entries": {}}

    def _load_index(self) -> dict:
        if not self.index_path.exists():
            return self._empty_index()

        try:
            with open(self.index_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise CacheServiceError(f"Failed to load cache index: {e}") from e

        if not isinstance(data, dict) or "entries" not in data:
            logger.warning("Invalid cache index format, resetting")
            return self._empty_index()

        return data

    def _save_index(self, data: dict):
        try:
            atomic_write(self.index_path, json.dumps(data, indent=2, sort_keys=True))
        except OSError as e:
            raise CacheServiceError(f"Failed to save cache index: {e}") from e

    @contextmanager
    def _lock(self):
        """
        Acquire the exclusive index lock.

        Raises:
            CacheServiceError: If lock cannot be acquired within timeout
        """
        self.lock_path.parent.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self.lock_path, timeout=self.lock_timeout)

        try:
            with lock:
                logger.debug("Acquired cache index lock")
                yield
            logger.debug("Released cache index lock")
        except Timeout as e:
            raise CacheServiceError(
                f"Could not acquire cache lock within {self.lock_timeout} seconds"
            ) from e

    # ------------------------------------------------------------------
    # CacheService
    # ------------------------------------------------------------------

    def restore(self, paths: Sequence[Path], key: str) -> Optional[str]:
        paths = [Path(p).absolute() for p in paths]

        with self._lock():
            entry = self._load_index()["entries"].get(key)
            if entry is None:
                logger.debug(f"Cache miss: {key}")
                return None

            entry_dir = self.entries_dir / entry["id"]
            if entry.get("paths") != [str(p) for p in paths]:
                logger.debug(f"Cache entry {key} was saved for different paths")
                return None

            try:
                for i, target in enumerate(paths):
                    source = entry_dir / str(i)
                    if not source.exists():
                        raise CacheServiceError(
                            f"Cache entry {key} is incomplete: missing {source.name}"
                        )
                    remove_path(target)
                    copy_path(source, target)
            except (OSError, FilesystemError) as e:
                raise CacheServiceError(f"Failed to restore {key}: {e}") from e

        logger.debug(f"Cache hit: {key}")
        return key

    def save(self, paths: Sequence[Path], key: str) -> None:
        paths = [Path(p).absolute() for p in paths]
        for path in paths:
            if not path.exists():
                raise CacheServiceError(f"Path to cache does not exist: {path}")

        self.entries_dir.mkdir(parents=True, exist_ok=True)
        entry_id = _entry_id(key)

        try:
            # Copy outside the lock, then swap the finished entry in
            with temporary_directory(
                prefix=".staging-", parent=self.cache_dir
            ) as staging:
                for i, path in enumerate(paths):
                    copy_path(path, staging / "entry" / str(i))

                with self._lock():
                    data = self._load_index()
                    move_path(staging / "entry", self.entries_dir / entry_id)
                    data["entries"][key] = {
                        "id": entry_id,
                        "paths": [str(p) for p in paths],
                        "saved": datetime.now().isoformat(),
                    }
                    self._save_index(data)
        except (OSError, FilesystemError) as e:
            raise CacheServiceError(f"Failed to save {key}: {e}") from e

        logger.debug(f"Saved cache entry: {key}")

    # ------------------------------------------------------------------
    # Housekeeping
    # ------------------------------------------------------------------

    def list_keys(self) -> List[str]:
        """List all cached keys, sorted."""
        with self._lock():
            return sorted(self._load_index()["entries"])

    def remove(self, key: str) -> bool:
        """
        Remove a cache entry.

        Returns:
            True if an entry was removed, False if the key was unknown
        """
        with self._lock():
            data = self._load_index()
            entry = data["entries"].pop(key, None)
            if entry is None:
                return False
            safe_rmtree(
                self.entries_dir / entry["id"], require_prefix=self.entries_dir
            )
            self._save_index(data)

        logger.info(f"Removed cache entry: {key}")
        return True

    def clear(self) -> int:
        """
        Remove every cache entry.

        Returns:
            Number of entries removed
        """
        with self._lock():
            data = self._load_index()
            count = len(data["entries"])
            safe_rmtree(self.entries_dir, require_prefix=self.cache_dir)
            self._save_index(self._empty_index())

        logger.info(f"Removed {count} cache entries")
        return count


__all__ = [
    "CacheService",
    "LocalCacheStore",
]
