"""
Cross-platform file system utilities for hurlkit.

This module provides the filesystem operations the installer relies on:
- Archive extraction (tar.gz, zip) with path traversal protection
- Non-recursive glob matching of files and directories
- Safe file operations (atomic writes, safe deletion, moves)
- Temporary directory management
"""

import glob
import os
import shutil
import sys
import tarfile
import tempfile
import zipfile
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from hurlkit.core.exceptions import (
    ExtractionError,
    InsecureArchiveError,
    UnsupportedArchiveFormat,
)

IS_WINDOWS = os.name == "nt"


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether ``path`` is located under ``parent``.

    Example:
        >>> is_relative_to(Path('/tmp/a/b'), Path('/tmp'))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


def glob_entries(directory: Union[str, Path], pattern: str) -> List[Path]:
    """
    Match files and directories against a glob pattern inside ``directory``.

    Matching is non-recursive: a pattern such as ``hurl-4.3.0*/bin`` matches
    the ``bin`` entry one level below a top-level ``hurl-4.3.0*`` entry, never
    anything nested deeper. Both files and directories are returned.

    Args:
        directory: Directory the pattern is relative to
        pattern: Glob pattern using '/' as separator

    Returns:
        Sorted list of matching paths

    Example:
        >>> glob_entries('/tmp/hurl.tmp', 'hurl-4.3.0*/bin')
        [PosixPath('/tmp/hurl.tmp/hurl-4.3.0-x86_64-unknown-linux-gnu/bin')]
    """
    directory = Path(directory)
    escaped_root = glob.escape(str(directory))
    full_pattern = os.path.join(escaped_root, *pattern.split("/"))
    return sorted(Path(p) for p in glob.glob(full_pattern))


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Prevents directory traversal attacks (e.g., paths containing '../').

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def archive_format(name: str) -> Optional[str]:
    """
    Detect the archive format from a file name or URL.

    Returns:
        'tar.gz', 'zip' or None when the suffix is not recognized

    Example:
        >>> archive_format('hurl-4.3.0-x86_64-pc-windows-msvc.zip')
        'zip'
    """
    lowered = name.lower()
    if lowered.endswith((".tar.gz", ".tgz")):
        return "tar.gz"
    if lowered.endswith(".zip"):
        return "zip"
    return None


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> None:
    """
    Extract an archive to a destination directory.

    Automatically detects archive format and extracts safely.
    Validates all paths to prevent directory traversal attacks.

    Supported formats:
    - .zip
    - .tar.gz, .tgz

    Args:
        archive_path: Path to the archive file
        destination: Directory to extract to

    Raises:
        UnsupportedArchiveFormat: If archive format is not recognized
        ExtractionError: If extraction fails
        InsecureArchiveError: If archive contains malicious paths

    Example:
        >>> extract_archive('hurl.tar.gz', '/tmp/hurl.tmp')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    fmt = archive_format(archive_path.name)
    if fmt is None:
        raise UnsupportedArchiveFormat(
            f"Unsupported archive format: {archive_path.name}. "
            "Supported: .tar.gz, .zip"
        )

    destination.mkdir(parents=True, exist_ok=True)

    try:
        if fmt == "zip":
            _extract_zip(archive_path, destination)
        else:
            _extract_tar(archive_path, destination, "r:gz")
    except InsecureArchiveError:
        raise
    except Exception as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e


def _extract_zip(archive_path: Path, destination: Path) -> None:
    """Extract a ZIP archive."""
    with zipfile.ZipFile(archive_path, "r") as zf:
        members = zf.namelist()

        for member in members:
            _validate_archive_path(member, destination)

        zf.extractall(destination)


def _extract_tar(archive_path: Path, destination: Path, mode: str) -> None:
    """Extract a tar archive with specified compression."""
    with tarfile.open(archive_path, mode) as tar:
        for member in tar.getmembers():
            _validate_archive_path(member.name, destination)

        # Extract with filter for security (Python 3.12+)
        # For older Python, we've already validated paths above
        if sys.version_info >= (3, 12):
            tar.extractall(destination, filter="data")
        else:
            tar.extractall(destination)


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    This ensures the file is never in a partially-written state.
    If the write fails, the original file (if any) remains unchanged.

    Example:
        >>> atomic_write('index.json', '{"entries": {}}')
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Create temp file in same directory (ensures same filesystem)
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except Exception:
        try:
            temp_path.unlink(missing_ok=True)
        except OSError:
            pass
        raise


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Safely remove a directory tree with safeguards.

    Args:
        path: Directory to remove
        require_prefix: If specified, path must be under this directory

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If deletion fails

    Example:
        >>> safe_rmtree('/tmp/hurl.tmp', require_prefix='/tmp')
    """
    path = Path(path).resolve()

    if require_prefix is not None:
        require_prefix = Path(require_prefix).resolve()
        if not is_relative_to(path, require_prefix):
            raise ValueError(
                f"Refusing to delete '{path}': "
                f"not under required prefix '{require_prefix}'"
            )

    if not path.exists():
        return

    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    try:
        if IS_WINDOWS:

            def handle_remove_readonly(func, path, exc):
                """Error handler for Windows read-only files."""
                if not os.access(path, os.W_OK):
                    os.chmod(path, 0o777)
                    func(path)
                else:
                    raise

            shutil.rmtree(path, onerror=handle_remove_readonly)
        else:
            shutil.rmtree(path)

    except Exception as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


def remove_path(path: Union[str, Path]) -> None:
    """
    Remove a file, symlink or directory tree if it exists.

    Example:
        >>> remove_path('/tmp/hurl-4.3.0')
    """
    path = Path(path)
    if path.is_symlink() or path.is_file():
        path.unlink()
    elif path.is_dir():
        safe_rmtree(path)


def move_path(source: Union[str, Path], destination: Union[str, Path]) -> Path:
    """
    Move a file or directory, replacing whatever is at ``destination``.

    The parent of ``destination`` is created when missing. Moves across
    filesystems fall back to copy + delete.

    Returns:
        The destination path
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        raise FilesystemError(f"Source does not exist: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    remove_path(destination)
    shutil.move(str(source), str(destination))
    return destination


def copy_path(source: Union[str, Path], destination: Union[str, Path]) -> None:
    """
    Copy a file or directory tree, preserving symlinks and metadata.

    Raises:
        FilesystemError: If source does not exist
    """
    source = Path(source)
    destination = Path(destination)

    if not source.exists():
        raise FilesystemError(f"Source does not exist: {source}")

    destination.parent.mkdir(parents=True, exist_ok=True)
    if source.is_dir():
        shutil.copytree(source, destination, symlinks=True)
    else:
        shutil.copy2(source, destination)


# ============================================================================
# Temporary File/Directory Management
# ============================================================================


@contextmanager
def temporary_directory(
    prefix: str = "hurlkit_",
    parent: Optional[Union[str, Path]] = None,
    cleanup: bool = True,
):
    """
    Context manager for temporary directory with automatic cleanup.

    Args:
        prefix: Prefix for temp directory name
        parent: Directory to create the temporary directory in
        cleanup: If True, remove directory on exit

    Yields:
        Path to temporary directory

    Example:
        >>> with temporary_directory() as tmp:
        ...     (tmp / 'file.txt').write_text('test')
    """
    if parent is not None:
        Path(parent).mkdir(parents=True, exist_ok=True)
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=parent))

    try:
        yield temp_dir
    finally:
        if cleanup and temp_dir.exists():
            safe_rmtree(temp_dir)


__all__ = [
    # Exceptions
    "FilesystemError",
    # Path utilities
    "is_relative_to",
    "glob_entries",
    # Archive extraction
    "archive_format",
    "extract_archive",
    # Safe file operations
    "atomic_write",
    "safe_rmtree",
    "remove_path",
    "move_path",
    "copy_path",
    # Temporary files
    "temporary_directory",
]
