"""
Core functionality for hurlkit.

This package contains the foundational modules that other components depend on.
"""

from .directory import (
    get_global_cache_dir,
    get_artifact_cache_dir,
    get_install_root,
    get_install_dir,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    normalize_os,
    normalize_arch,
    clear_platform_cache,
)

from .version import Version, parse_version, strip_v_prefix

from .exceptions import (
    HurlKitError,
    ConfigError,
    InvalidVersionError,
    MetadataLookupError,
    UnsupportedTargetError,
    DownloadError,
    ExtractionError,
    UnsupportedArchiveFormat,
    InsecureArchiveError,
    AmbiguousArchiveLayoutError,
    CacheServiceError,
    ExecutableNotFoundError,
    VerificationError,
)

__all__ = [
    "get_global_cache_dir",
    "get_artifact_cache_dir",
    "get_install_root",
    "get_install_dir",
    "PlatformInfo",
    "detect_platform",
    "normalize_os",
    "normalize_arch",
    "clear_platform_cache",
    "Version",
    "parse_version",
    "strip_v_prefix",
    "HurlKitError",
    "ConfigError",
    "InvalidVersionError",
    "MetadataLookupError",
    "UnsupportedTargetError",
    "DownloadError",
    "ExtractionError",
    "UnsupportedArchiveFormat",
    "InsecureArchiveError",
    "AmbiguousArchiveLayoutError",
    "CacheServiceError",
    "ExecutableNotFoundError",
    "VerificationError",
]
