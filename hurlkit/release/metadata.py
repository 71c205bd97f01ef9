"""
Release metadata lookup.

Queries a remote repository for its most recent release tag. The default
implementation talks to the GitHub REST API.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import requests

from hurlkit.core.exceptions import MetadataLookupError

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com"


class ReleaseMetadataService(ABC):
    """Abstract interface for "latest release" lookups."""

    @abstractmethod
    def get_latest_release_tag(self, owner: str, repo: str) -> str:
        """
        Get the tag name of the latest release of ``owner/repo``.

        Args:
            owner: Repository owner (e.g., "Orange-OpenSource")
            repo: Repository name (e.g., "hurl")

        Returns:
            Tag name exactly as published (e.g., "v5.0.0" or "4.3.0")

        Raises:
            MetadataLookupError: If the lookup fails for any reason
        """
        pass


class GitHubReleaseClient(ReleaseMetadataService):
    """
    GitHub REST API release lookup.

    Example:
        >>> client = GitHubReleaseClient(token="ghp_...")
        >>> client.get_latest_release_tag("Orange-OpenSource", "hurl")
        '5.0.0'
    """

    def __init__(
        self,
        token: Optional[str] = None,
        api_url: str = DEFAULT_API_URL,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: Optional API token (raises rate limits, allows private repos)
            api_url: Base URL of the REST API
            timeout: Request timeout in seconds
            session: Optional requests session to reuse
        """
        self.token = token or None
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _headers(self) -> dict:
        headers = {
            "Accept": "application/vnd.github+json",
            "User-Agent": "hurlkit",
        }
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get_latest_release_tag(self, owner: str, repo: str) -> str:
        repository = f"{owner}/{repo}"
        url = f"{self.api_url}/repos/{repository}/releases/latest"
        logger.debug(f"Querying latest release: {url}")

        try:
            response = self.session.get(
                url, headers=self._headers(), timeout=self.timeout
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            raise MetadataLookupError(repository, f"HTTP {status}") from e
        except requests.RequestException as e:
            raise MetadataLookupError(repository, str(e)) from e

        try:
            data = response.json()
        except ValueError as e:
            raise MetadataLookupError(repository, f"invalid JSON response: {e}") from e

        tag = data.get("tag_name") if isinstance(data, dict) else None
        if not tag or not isinstance(tag, str):
            raise MetadataLookupError(repository, "response has no tag_name")

        logger.debug(f"Latest release of {repository}: {tag}")
        return tag


__all__ = [
    "DEFAULT_API_URL",
    "ReleaseMetadataService",
    "GitHubReleaseClient",
]
