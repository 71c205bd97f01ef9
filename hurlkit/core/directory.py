"""
Directory layout for hurlkit.

Directory Structure:
    Global Cache (~/.hurlkit/ or %USERPROFILE%\\.hurlkit\\):
        - cache/          : Key-addressed artifact cache
          - entries/      : Saved installation trees, one per cache key
          - index.json    : Cache key database
          - lock/         : Concurrent access control files

    Install root (system temporary directory by default):
        - hurl-<version>/ : Installed hurl distribution
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from hurlkit.core.exceptions import ConfigError

HOME_ENV_VAR = "HURLKIT_HOME"


def get_global_cache_dir() -> Path:
    """
    Get the platform-specific global hurlkit directory.

    ``HURLKIT_HOME`` overrides the default location.

    Returns:
        Path: The global directory path.
            - Windows: %USERPROFILE%\\.hurlkit
            - Linux/macOS: ~/.hurlkit/

    Raises:
        ConfigError: If the user profile directory cannot be determined
    """
    override = os.environ.get(HOME_ENV_VAR)
    if override:
        return Path(override).expanduser()

    if os.name == "nt":  # Windows
        user_profile = os.environ.get("USERPROFILE")
        if not user_profile:
            raise ConfigError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine global cache directory."
            )
        return Path(user_profile) / ".hurlkit"
    else:  # Linux/macOS
        return Path.home() / ".hurlkit"


def get_artifact_cache_dir(base: Optional[Union[str, Path]] = None) -> Path:
    """Directory of the local artifact cache (``<global>/cache`` by default)."""
    if base is not None:
        return Path(base)
    return get_global_cache_dir() / "cache"


def get_install_root(base: Optional[Union[str, Path]] = None) -> Path:
    """Directory that receives ``hurl-<version>`` installs (temp dir by default)."""
    if base is not None:
        return Path(base)
    return Path(tempfile.gettempdir())


def get_install_dir(version: str, base: Optional[Union[str, Path]] = None) -> Path:
    """
    Stable install directory for a resolved version.

    Example:
        >>> get_install_dir("4.3.0", "/opt/tools")
        PosixPath('/opt/tools/hurl-4.3.0')
    """
    return get_install_root(base) / f"hurl-{version}"


__all__ = [
    "HOME_ENV_VAR",
    "get_global_cache_dir",
    "get_artifact_cache_dir",
    "get_install_root",
    "get_install_dir",
]
