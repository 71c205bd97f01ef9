"""
Resolve command implementation.
"""

import logging

from hurlkit.cli.utils import config_from_args
from hurlkit.release.metadata import GitHubReleaseClient
from hurlkit.release.resolver import VersionResolver

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Print the concrete version a specifier resolves to.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    resolver = VersionResolver(
        metadata=GitHubReleaseClient(token=config.github_token, api_url=config.api_url)
    )
    print(resolver.resolve(config.version))
    return 0
