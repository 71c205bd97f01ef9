"""
Install command implementation.

Resolves, acquires, installs and verifies hurl, then prints the path of the
installed executable.
"""

import logging

from hurlkit.cli.utils import config_from_args
from hurlkit.install.installer import Installer

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    config = config_from_args(args)
    result = Installer(config).run()

    source = "cache" if result.from_cache else "download"
    logger.debug(f"hurl {result.version} installed from {source}")
    print(result.executable)
    return 0
