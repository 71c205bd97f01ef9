"""
Platform detection for hurlkit.

This module detects the current operating system and CPU architecture and
normalizes the many spellings of both ('darwin', 'win32', 'x86_64',
'aarch64', ...) to the canonical names used to select a hurl distribution.

Usage:
    from hurlkit.core.platform import detect_platform

    platform_info = detect_platform()
    print(f"OS: {platform_info.os}")
    print(f"Architecture: {platform_info.arch}")
    print(f"Platform string: {platform_info.platform_string()}")
"""

import functools
import platform
from dataclasses import dataclass

# Aliases seen in the wild (Python's platform module, Node's process.platform,
# Rust target triples) mapped onto canonical names.
_OS_ALIASES = {
    "linux": "linux",
    "darwin": "macos",
    "macos": "macos",
    "osx": "macos",
    "windows": "windows",
    "win32": "windows",
    "win": "windows",
}

_ARCH_ALIASES = {
    "x86_64": "x64",
    "amd64": "x64",
    "x64": "x64",
    "aarch64": "arm64",
    "arm64": "arm64",
    "i386": "x86",
    "i686": "x86",
    "x86": "x86",
    "ia32": "x86",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Platform information.

    Attributes:
        os: Operating system ('windows', 'linux', 'macos')
        arch: CPU architecture ('x64', 'arm64', 'x86', 'arm')
    """

    os: str
    arch: str

    def platform_string(self) -> str:
        """
        Get canonical platform string (e.g., 'linux-x64', 'macos-arm64').

        Example:
            >>> PlatformInfo('linux', 'x64').platform_string()
            'linux-x64'
        """
        return f"{self.os}-{self.arch}"

    def __str__(self) -> str:
        return self.platform_string()


def normalize_os(name: str) -> str:
    """
    Normalize an operating system name.

    Unknown names are lower-cased and returned unchanged so callers can
    report them.

    Example:
        >>> normalize_os('darwin')
        'macos'
    """
    key = name.strip().lower()
    return _OS_ALIASES.get(key, key)


def normalize_arch(name: str) -> str:
    """
    Normalize a CPU architecture name.

    Example:
        >>> normalize_arch('aarch64')
        'arm64'
    """
    key = name.strip().lower()
    if key in _ARCH_ALIASES:
        return _ARCH_ALIASES[key]
    if key.startswith("arm"):
        return "arm"
    return key


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.

    Returns:
        PlatformInfo instance with detected platform information

    Example:
        >>> platform_info = detect_platform()
        >>> print(f"Running on {platform_info.platform_string()}")
        Running on linux-x64
    """
    return PlatformInfo(
        os=normalize_os(platform.system()),
        arch=normalize_arch(platform.machine()),
    )


def clear_platform_cache():
    """
    Clear the platform detection cache.

    Useful for testing or when platform information changes.
    """
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "normalize_os",
    "normalize_arch",
    "detect_platform",
    "clear_platform_cache",
]
