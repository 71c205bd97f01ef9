"""
Shared utilities for CLI commands.
"""

import logging
from typing import Any, Dict

from hurlkit.config import InstallerConfig, load_config, merge_settings

logger = logging.getLogger(__name__)

# argparse destination -> configuration setting
_OPTION_SETTINGS = {
    "hurl_version": "version",
    "github_token": "github_token",
    "no_cache": "disable_cache",
    "install_root": "install_root",
    "cache_dir": "cache_dir",
}


def cli_overrides(args) -> Dict[str, Any]:
    """Collect the configuration settings given on the command line."""
    return {
        setting: getattr(args, dest)
        for dest, setting in _OPTION_SETTINGS.items()
        if getattr(args, dest, None) is not None
    }


def config_from_args(args) -> InstallerConfig:
    """
    Build the effective configuration for a command.

    Raises:
        ConfigError: If the configuration is invalid or has no version
    """
    config = load_config(cli_overrides(args), config_file=args.config)
    logger.debug(f"Effective configuration: version={config.version}")
    return config


def settings_from_args(args) -> Dict[str, Any]:
    """Merged raw settings, for commands that do not need a version."""
    return merge_settings(cli_overrides(args), config_file=args.config)


__all__ = [
    "cli_overrides",
    "config_from_args",
    "settings_from_args",
]
