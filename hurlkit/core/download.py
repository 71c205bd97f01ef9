"""
Network download.

This module provides the archive download used by the acquisition pipeline:
- HTTP/HTTPS downloads with TLS verification and redirects
- Streaming to disk in chunks

A failed download is reported once; nothing is retried.
"""

import logging
from pathlib import Path

import requests
from requests.exceptions import RequestException

from hurlkit.core.exceptions import DownloadError

logger = logging.getLogger(__name__)

USER_AGENT = "hurlkit"
CHUNK_SIZE = 8192


def download_file(url: str, destination: Path, timeout: int = 30) -> Path:
    """
    Download file from URL to destination.

    Args:
        url: URL to download from
        destination: Local path to save file
        timeout: Request timeout in seconds

    Returns:
        Path to downloaded file

    Raises:
        DownloadError: If download fails
        ValueError: If URL or destination is invalid

    Example:
        >>> from hurlkit.core.download import download_file
        >>> url = "https://example.com/hurl-4.3.0-x86_64-unknown-linux-gnu.tar.gz"
        >>> download_file(url, Path("work/hurl.tar.gz"))
    """
    if not url:
        raise ValueError("URL cannot be empty")

    if not destination:
        raise ValueError("Destination path cannot be empty")

    destination = Path(destination)
    destination.parent.mkdir(parents=True, exist_ok=True)

    logger.info(f"Downloading from {url}")
    try:
        with requests.get(
            url,
            stream=True,
            timeout=timeout,
            allow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as response:
            response.raise_for_status()

            downloaded = 0
            with open(destination, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)
    except (RequestException, OSError) as e:
        destination.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}") from e

    logger.debug(f"Downloaded {downloaded} bytes to {destination}")
    return destination


__all__ = [
    "download_file",
]
