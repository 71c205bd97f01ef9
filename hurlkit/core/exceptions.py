"""
Centralized exception hierarchy for hurlkit.

This module defines all custom exceptions used across the codebase
so that callers can tell recoverable cache problems apart from the
fatal errors that abort an installation run.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class HurlKitError(Exception):
    """Base exception for all hurlkit errors."""

    pass


class ConfigError(HurlKitError):
    """Configuration loading or validation error."""

    pass


class InvalidVersionError(HurlKitError):
    """Version string cannot be parsed or compared."""

    pass


# ============================================================================
# Release Exceptions
# ============================================================================


class MetadataLookupError(HurlKitError):
    """Raised when the remote "latest release" query fails."""

    def __init__(self, repository: str, reason: str):
        self.repository = repository
        self.reason = reason
        super().__init__(f"Failed to fetch latest release of {repository}: {reason}")


class UnsupportedTargetError(HurlKitError):
    """Raised when no artifact exists for a platform/architecture/version."""

    def __init__(self, platform: str, arch: str, version: str = ""):
        self.platform = platform
        self.arch = arch
        self.version = version
        msg = f"Unsupported target: platform={platform} arch={arch}"
        if version:
            msg += f" version={version}"
        super().__init__(msg)


# ============================================================================
# Acquisition Exceptions
# ============================================================================


class DownloadError(HurlKitError):
    """Exception raised when download fails."""

    pass


class ExtractionError(HurlKitError):
    """Failed to extract an archive."""

    pass


class UnsupportedArchiveFormat(ExtractionError):
    """Archive format is not supported."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


class AmbiguousArchiveLayoutError(HurlKitError):
    """Raised when binary discovery finds zero or several candidates."""

    def __init__(self, pattern: str, matches: list):
        self.pattern = pattern
        self.matches = list(matches)
        super().__init__(
            f"Expected exactly one entry matching '{pattern}' in the "
            f"distribution archive, found {len(self.matches)}"
        )


class CacheServiceError(HurlKitError):
    """Raised by the artifact cache service on storage or lock failures."""

    pass


# ============================================================================
# Verification Exceptions
# ============================================================================


class ExecutableNotFoundError(HurlKitError):
    """Raised when the installed executable is not on the search path."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"{name} binary file not found in $PATH")


class VerificationError(HurlKitError):
    """Raised when the installed executable fails to run."""

    pass


__all__ = [
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
