"""
Version specifier resolution.

Turns the version requested by the user ("latest", "v4.3.0", "4.3.0") into
the concrete version used for cache keys and download URLs.
"""

import logging
from typing import Optional

from hurlkit.core.version import strip_v_prefix
from hurlkit.release.metadata import GitHubReleaseClient, ReleaseMetadataService

logger = logging.getLogger(__name__)

HURL_OWNER = "Orange-OpenSource"
HURL_REPO = "hurl"
LATEST = "latest"


def is_latest(spec: str) -> bool:
    """Check whether a version specifier requests the latest release."""
    return strip_v_prefix(spec.strip()).lower() == LATEST


class VersionResolver:
    """
    Resolve version specifiers to concrete versions.

    Explicit versions are returned with a single leading 'v'/'V' removed and
    are otherwise passed through unchanged. "latest" (any case, with or
    without the prefix) is looked up through the release metadata service.

    Example:
        >>> VersionResolver().resolve("v4.3.0")
        '4.3.0'
    """

    def __init__(
        self,
        metadata: Optional[ReleaseMetadataService] = None,
        owner: str = HURL_OWNER,
        repo: str = HURL_REPO,
    ):
        """
        Initialize resolver.

        Args:
            metadata: Release metadata service (GitHub client if None)
            owner: Upstream repository owner
            repo: Upstream repository name
        """
        self.metadata = metadata
        self.owner = owner
        self.repo = repo

    def resolve(self, spec: str, auth_token: Optional[str] = None) -> str:
        """
        Resolve a version specifier.

        Args:
            spec: Requested version ("latest", "v4.3.0", "4.3.0", ...)
            auth_token: Optional credential for the metadata lookup, used
                when no metadata service was given to the constructor

        Returns:
            Concrete version string (e.g., "4.3.0")

        Raises:
            MetadataLookupError: If "latest" was requested and the lookup failed
        """
        text = strip_v_prefix(spec.strip())
        if text.lower() == LATEST:
            logger.debug(f"Requesting latest {self.repo} version...")
            metadata = self.metadata or GitHubReleaseClient(token=auth_token)
            tag = metadata.get_latest_release_tag(self.owner, self.repo)
            version = strip_v_prefix(tag.strip())
            logger.debug(f"Latest {self.repo} version: {version}")
            return version

        return text


__all__ = [
    "HURL_OWNER",
    "HURL_REPO",
    "LATEST",
    "is_latest",
    "VersionResolver",
]
