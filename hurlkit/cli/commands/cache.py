"""
Cache command implementation.

Lists and removes entries of the local artifact cache.
"""

import logging

from hurlkit.cache.store import LocalCacheStore
from hurlkit.cli.utils import settings_from_args

logger = logging.getLogger(__name__)


def _store(args) -> LocalCacheStore:
    return LocalCacheStore(settings_from_args(args).get("cache_dir"))


def run_list(args) -> int:
    """List cached entries, one key per line."""
    keys = _store(args).list_keys()
    if not keys:
        logger.info("No cached entries")
        return 0

    for key in keys:
        print(key)
    return 0


def run_clear(args) -> int:
    """Remove one cached entry, or all of them when no key is given."""
    store = _store(args)
    if args.key is None:
        count = store.clear()
        print(f"Removed {count} cache entries")
        return 0

    if not store.remove(args.key):
        logger.error(f"No cache entry named '{args.key}'")
        return 1

    print(f"Removed {args.key}")
    return 0


def run(args) -> int:
    """
    Dispatch cache sub-commands.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    handlers = {
        "list": run_list,
        "clear": run_clear,
    }

    handler = handlers.get(getattr(args, "cache_command", None))
    if handler is None:
        logger.error("No cache sub-command specified (use 'list' or 'clear')")
        return 1

    return handler(args)
