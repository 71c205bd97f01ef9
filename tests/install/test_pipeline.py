"""
Unit tests for the acquisition pipeline.
"""

import shutil
from unittest.mock import Mock

import pytest

from hurlkit.cache.policy import ArtifactCache
from hurlkit.cache.store import CacheService, LocalCacheStore
from hurlkit.core.exceptions import (
    AmbiguousArchiveLayoutError,
    CacheServiceError,
    DownloadError,
    UnsupportedTargetError,
)
from hurlkit.core.platform import PlatformInfo
from hurlkit.install.pipeline import AcquisitionPipeline
from hurlkit.release.locator import DistributionLocator

LINUX_X64 = PlatformInfo("linux", "x64")


class FakeDownloader:
    """Serves prepared archives by URL and records requests."""

    def __init__(self):
        self.archives = {}
        self.urls = []

    def __call__(self, url, destination):
        self.urls.append(url)
        if url not in self.archives:
            raise DownloadError(f"Failed to download {url}: 404")
        destination.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy(self.archives[url], destination)
        return destination


@pytest.fixture
def downloader(make_archive):
    fake = FakeDownloader()
    base = "https://github.com/Orange-OpenSource/hurl/releases/download"
    fake.archives[
        f"{base}/4.3.0/hurl-4.3.0-x86_64-unknown-linux-gnu.tar.gz"
    ] = make_archive(
        "hurl-4.3.0.tar.gz",
        {
            "hurl-4.3.0-x86_64-unknown-linux-gnu/bin/hurl": b"hurl 4.3.0",
            "hurl-4.3.0-x86_64-unknown-linux-gnu/README.md": b"readme",
        },
    )
    fake.archives[f"{base}/4.0.0/hurl-4.0.0-x86_64-linux.tar.gz"] = make_archive(
        "hurl-4.0.0.tar.gz", {"hurl-4.0.0/hurl": b"hurl 4.0.0"}
    )
    fake.archives[
        f"{base}/4.3.0/hurl-4.3.0-x86_64-pc-windows-msvc.zip"
    ] = make_archive("hurl-4.3.0.zip", {"hurl.exe": b"MZ"})
    return fake


@pytest.fixture
def cache(tmp_path):
    return ArtifactCache(LocalCacheStore(tmp_path / "cache"))


def make_pipeline(downloader, cache, tmp_path, platform=LINUX_X64):
    return AcquisitionPipeline(
        locator=DistributionLocator(),
        cache=cache,
        platform=platform,
        downloader=downloader,
        work_root=tmp_path / "work",
    )


class TestAcquire:
    """Test AcquisitionPipeline.acquire."""

    def test_fresh_install_with_bin_layout(self, downloader, cache, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.3.0"

        restored = make_pipeline(downloader, cache, tmp_path).acquire(
            "4.3.0", install_dir
        )

        assert restored is False
        assert (install_dir / "hurl").read_bytes() == b"hurl 4.3.0"
        assert not (install_dir / "README.md").exists()
        assert list((tmp_path / "work").iterdir()) == []

    def test_fresh_install_with_flat_layout(self, downloader, cache, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.0.0"

        make_pipeline(downloader, cache, tmp_path).acquire("4.0.0", install_dir)

        assert (install_dir / "hurl").read_bytes() == b"hurl 4.0.0"

    def test_zip_install(self, downloader, cache, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.3.0"
        pipeline = make_pipeline(
            downloader, cache, tmp_path, platform=PlatformInfo("windows", "x64")
        )

        pipeline.acquire("4.3.0", install_dir)

        assert (install_dir / "hurl.exe").read_bytes() == b"MZ"

    def test_second_run_is_cache_hit(self, downloader, cache, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.3.0"
        pipeline = make_pipeline(downloader, cache, tmp_path)

        assert pipeline.acquire("4.3.0", install_dir) is False
        shutil.rmtree(install_dir)
        assert pipeline.acquire("4.3.0", install_dir) is True

        assert len(downloader.urls) == 1
        assert (install_dir / "hurl").read_bytes() == b"hurl 4.3.0"

    def test_cache_key(self, downloader, tmp_path):
        service = Mock(spec=CacheService)
        service.restore.return_value = None
        install_dir = tmp_path / "root" / "hurl-4.3.0"

        make_pipeline(downloader, ArtifactCache(service), tmp_path).acquire(
            "4.3.0", install_dir
        )

        service.restore.assert_called_once_with(
            [install_dir], "hurl-cache-4.3.0-linux-x64"
        )
        service.save.assert_called_once_with(
            [install_dir], "hurl-cache-4.3.0-linux-x64"
        )

    def test_disabled_cache_always_downloads(self, downloader, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.3.0"
        cache = ArtifactCache(LocalCacheStore(tmp_path / "cache"), enabled=False)
        pipeline = make_pipeline(downloader, cache, tmp_path)

        pipeline.acquire("4.3.0", install_dir)
        pipeline.acquire("4.3.0", install_dir)

        assert len(downloader.urls) == 2

    def test_restore_error_falls_back_to_download(self, downloader, tmp_path):
        service = Mock(spec=CacheService)
        service.restore.side_effect = CacheServiceError("cache unavailable")
        install_dir = tmp_path / "root" / "hurl-4.3.0"

        restored = make_pipeline(downloader, ArtifactCache(service), tmp_path).acquire(
            "4.3.0", install_dir
        )

        assert restored is False
        assert (install_dir / "hurl").exists()

    def test_save_error_is_not_fatal(self, downloader, tmp_path):
        service = Mock(spec=CacheService)
        service.restore.return_value = None
        service.save.side_effect = CacheServiceError("quota exceeded")
        install_dir = tmp_path / "root" / "hurl-4.3.0"

        restored = make_pipeline(downloader, ArtifactCache(service), tmp_path).acquire(
            "4.3.0", install_dir
        )

        assert restored is False
        assert (install_dir / "hurl").exists()

    def test_stale_install_dir_replaced(self, downloader, cache, tmp_path):
        install_dir = tmp_path / "root" / "hurl-4.3.0"
        install_dir.mkdir(parents=True)
        (install_dir / "stale").write_text("old")

        make_pipeline(downloader, cache, tmp_path).acquire("4.3.0", install_dir)

        assert not (install_dir / "stale").exists()
        assert (install_dir / "hurl").exists()

    def test_download_error_propagates(self, downloader, cache, tmp_path):
        with pytest.raises(DownloadError):
            make_pipeline(downloader, cache, tmp_path).acquire(
                "4.2.0", tmp_path / "root" / "hurl-4.2.0"
            )

    def test_unsupported_target_before_download(self, downloader, cache, tmp_path):
        pipeline = make_pipeline(
            downloader, cache, tmp_path, platform=PlatformInfo("linux", "arm64")
        )

        with pytest.raises(UnsupportedTargetError):
            pipeline.acquire("4.0.0", tmp_path / "root" / "hurl-4.0.0")

        assert downloader.urls == []

    def test_ambiguous_layout(self, downloader, cache, make_archive, tmp_path):
        url = (
            "https://github.com/Orange-OpenSource/hurl/releases/download"
            "/4.3.1/hurl-4.3.1-x86_64-unknown-linux-gnu.tar.gz"
        )
        downloader.archives[url] = make_archive(
            "hurl-4.3.1.tar.gz",
            {"hurl-4.3.1-a/bin/hurl": b"a", "hurl-4.3.1-b/bin/hurl": b"b"},
        )
        install_dir = tmp_path / "root" / "hurl-4.3.1"

        with pytest.raises(AmbiguousArchiveLayoutError):
            make_pipeline(downloader, cache, tmp_path).acquire("4.3.1", install_dir)

        assert not install_dir.exists()
