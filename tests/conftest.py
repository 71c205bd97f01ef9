"""
Pytest configuration and shared fixtures for hurlkit tests.
"""

import io
import tarfile
import zipfile
from pathlib import Path
from typing import Dict

import pytest

from hurlkit.core.platform import clear_platform_cache
from hurlkit.release.locator import load_distribution_table


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if config.getoption("--integration"):
        return

    skip_integration = pytest.mark.skip(reason="need --integration option to run")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch) -> Path:
    """Point the global hurlkit directory at a per-test location."""
    home = tmp_path / "hurlkit-home"
    monkeypatch.setenv("HURLKIT_HOME", str(home))
    for name in (
        "HURLKIT_VERSION",
        "HURLKIT_GITHUB_TOKEN",
        "HURLKIT_DISABLE_CACHE",
        "HURLKIT_INSTALL_ROOT",
        "HURLKIT_CACHE_DIR",
        "INPUT_VERSION",
        "INPUT_GITHUB-TOKEN",
        "INPUT_DISABLE-CACHE",
        "GITHUB_TOKEN",
        "GITHUB_ACTIONS",
        "GITHUB_PATH",
        "GITHUB_OUTPUT",
    ):
        monkeypatch.delenv(name, raising=False)
    return home


@pytest.fixture
def reset_platform_cache():
    """Clear platform detection cache around a test."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture
def distribution_table():
    """The embedded distribution table."""
    return load_distribution_table()


def _write_tar_gz(path: Path, files: Dict[str, bytes]) -> Path:
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return path


def _write_zip(path: Path, files: Dict[str, bytes]) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return path


@pytest.fixture
def make_archive(tmp_path: Path):
    """
    Factory building a real distribution archive.

    Usage:
        archive = make_archive("hurl-4.3.0.tar.gz", {"hurl-4.3.0/bin/hurl": b"..."})
    """
    archives = tmp_path / "archives"
    archives.mkdir()

    def _make(name: str, files: Dict[str, bytes]) -> Path:
        path = archives / name
        if name.endswith(".zip"):
            return _write_zip(path, files)
        return _write_tar_gz(path, files)

    return _make
