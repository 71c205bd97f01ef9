"""
Archive unpacking strategies.

tar.gz distributions carry a versioned top-level directory whose name has
changed across upstream releases, so they are extracted into a staging
directory and the binary root is discovered with the layout glob pattern.
zip distributions are flat and extract straight into the install directory.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Optional

from hurlkit.core.exceptions import (
    AmbiguousArchiveLayoutError,
    UnsupportedArchiveFormat,
)
from hurlkit.core.filesystem import (
    extract_archive,
    glob_entries,
    move_path,
    remove_path,
    temporary_directory,
)

logger = logging.getLogger(__name__)


def find_binary_root(staging_dir: Path, pattern: str) -> Path:
    """
    Find the single entry of ``staging_dir`` matching ``pattern``.

    Raises:
        AmbiguousArchiveLayoutError: If zero or several entries match
    """
    matches = glob_entries(staging_dir, pattern)
    if len(matches) != 1:
        raise AmbiguousArchiveLayoutError(pattern, matches)
    return matches[0]


class Extractor:
    """
    Unpack a downloaded distribution into its install directory.

    Example:
        >>> extractor = Extractor()
        >>> extractor.extract(archive, "tar.gz", install_dir, "hurl-4.3.0*/bin")
    """

    def __init__(self, staging_root: Optional[Path] = None):
        """
        Initialize extractor.

        Args:
            staging_root: Parent of tar.gz staging directories
                (install directory's parent if None)
        """
        self.staging_root = staging_root
        self._strategies: Dict[str, Callable[[Path, Path, str], None]] = {
            "tar.gz": self._extract_tar_gz,
            "zip": self._extract_zip,
        }

    def extract(
        self, archive: Path, fmt: Optional[str], install_dir: Path, pattern: str
    ) -> Path:
        """
        Unpack ``archive`` into ``install_dir``.

        Args:
            archive: Downloaded archive
            fmt: Archive format ('tar.gz' or 'zip')
            install_dir: Final install directory
            pattern: Binary root glob pattern for tar.gz layouts

        Returns:
            The install directory

        Raises:
            UnsupportedArchiveFormat: If ``fmt`` has no strategy
            ExtractionError: If unpacking fails
            AmbiguousArchiveLayoutError: If the binary root is not unique
        """
        strategy = self._strategies.get(fmt or "")
        if strategy is None:
            raise UnsupportedArchiveFormat(
                f"Unsupported archive format: {fmt or archive.name}"
            )

        logger.debug(f"Extracting {archive.name} ({fmt}) into {install_dir}")
        strategy(archive, install_dir, pattern)
        return install_dir

    def _extract_tar_gz(self, archive: Path, install_dir: Path, pattern: str):
        parent = self.staging_root or install_dir.parent
        with temporary_directory(prefix=".hurl-staging-", parent=parent) as staging:
            extract_archive(archive, staging)
            archive.unlink(missing_ok=True)

            binary_root = find_binary_root(staging, pattern)
            logger.debug(f"Found binary root {binary_root.relative_to(staging)}")
            move_path(binary_root, install_dir)

    def _extract_zip(self, archive: Path, install_dir: Path, pattern: str):
        remove_path(install_dir)
        extract_archive(archive, install_dir)


__all__ = [
    "find_binary_root",
    "Extractor",
]
