"""
Acquisition of a hurl distribution.

Restores the install directory from the artifact cache, or downloads and
unpacks the matching release archive and stores the result in the cache.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from hurlkit.cache.policy import ArtifactCache, make_cache_key
from hurlkit.core.download import download_file
from hurlkit.core.filesystem import remove_path, temporary_directory
from hurlkit.core.platform import PlatformInfo, detect_platform
from hurlkit.install.extractor import Extractor
from hurlkit.release.locator import DistributionLocator

logger = logging.getLogger(__name__)


class AcquisitionPipeline:
    """
    Put a given hurl version into an install directory.

    Example:
        >>> pipeline = AcquisitionPipeline(DistributionLocator(), ArtifactCache())
        >>> pipeline.acquire("4.3.0", Path("/tmp/hurl-4.3.0"))
        False
    """

    def __init__(
        self,
        locator: DistributionLocator,
        cache: ArtifactCache,
        platform: Optional[PlatformInfo] = None,
        downloader: Callable[..., Path] = download_file,
        work_root: Optional[Path] = None,
    ):
        """
        Initialize pipeline.

        Args:
            locator: Distribution locator
            cache: Best-effort artifact cache
            platform: Target platform (detected if None)
            downloader: Callable taking (url, destination) and returning the
                downloaded path
            work_root: Parent of temporary download directories
                (system temp if None)
        """
        self.locator = locator
        self.cache = cache
        self.platform = platform or detect_platform()
        self.downloader = downloader
        self.work_root = work_root
        self.extractor = Extractor()

    def acquire(self, version: str, install_dir: Path) -> bool:
        """
        Make ``install_dir`` hold the hurl distribution for ``version``.

        Args:
            version: Resolved version (e.g., "4.3.0")
            install_dir: Target install directory

        Returns:
            True if the directory was restored from the cache, False if the
            distribution was downloaded

        Raises:
            UnsupportedTargetError: If no artifact exists for this platform
            DownloadError: If the download fails
            ExtractionError: If the archive cannot be unpacked
            AmbiguousArchiveLayoutError: If the binary root is not unique
        """
        install_dir = Path(install_dir)
        key = make_cache_key(version, self.platform.os, self.platform.arch)

        if self.cache.restore(install_dir, key):
            logger.info(f"Restored hurl {version} from cache ({key})")
            return True

        location = self.locator.locate(self.platform.os, self.platform.arch, version)
        pattern = self.locator.binary_root_pattern(version)

        remove_path(install_dir)

        with temporary_directory(
            prefix="hurlkit_download_", parent=self.work_root
        ) as work:
            archive = self.downloader(location.url, work / location.artifact_name)
            self.extractor.extract(
                Path(archive), location.archive_format, install_dir, pattern
            )

        logger.info(f"Installed hurl {version} into {install_dir}")
        self.cache.save(install_dir, key)
        return False


__all__ = ["AcquisitionPipeline"]
