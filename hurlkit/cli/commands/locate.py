"""
Locate command implementation.

Prints the download URL of the hurl distribution for a version and target,
without downloading anything.
"""

import logging

from hurlkit.cli.utils import settings_from_args
from hurlkit.core.platform import detect_platform
from hurlkit.core.version import strip_v_prefix
from hurlkit.release.locator import DEFAULT_DOWNLOAD_URL, DistributionLocator

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the locate command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    settings = settings_from_args(args)
    current = detect_platform()
    platform = args.platform or current.os
    arch = args.arch or current.arch
    version = strip_v_prefix(args.hurl_version.strip())

    locator = DistributionLocator(
        download_url=str(settings.get("download_url") or DEFAULT_DOWNLOAD_URL)
    )
    location = locator.locate(platform, arch, version)
    logger.debug(f"Archive format: {location.archive_format}")
    print(location.url)
    return 0
