"""
Unit tests for version resolution.
"""

from unittest.mock import Mock, patch

import pytest

from hurlkit.core.exceptions import MetadataLookupError
from hurlkit.release.metadata import ReleaseMetadataService
from hurlkit.release.resolver import VersionResolver, is_latest


@pytest.fixture
def metadata():
    service = Mock(spec=ReleaseMetadataService)
    service.get_latest_release_tag.return_value = "v5.0.0"
    return service


class TestIsLatest:
    @pytest.mark.parametrize(
        "spec", ["latest", "LATEST", "Latest", " latest ", "vlatest", "VLatest"]
    )
    def test_latest(self, spec):
        assert is_latest(spec)

    @pytest.mark.parametrize("spec", ["4.3.0", "v4.3.0", "latest-1", ""])
    def test_not_latest(self, spec):
        assert not is_latest(spec)


class TestVersionResolver:
    """Test VersionResolver."""

    @pytest.mark.parametrize(
        "spec,expected",
        [
            ("4.3.0", "4.3.0"),
            ("v4.3.0", "4.3.0"),
            ("V4.3.0", "4.3.0"),
            ("1.7", "1.7"),
            (" 4.3.0 ", "4.3.0"),
        ],
    )
    def test_explicit_versions(self, metadata, spec, expected):
        resolver = VersionResolver(metadata=metadata)

        assert resolver.resolve(spec) == expected
        metadata.get_latest_release_tag.assert_not_called()

    def test_explicit_version_not_validated(self, metadata):
        assert VersionResolver(metadata=metadata).resolve("nightly") == "nightly"

    @pytest.mark.parametrize("spec", ["latest", "LATEST", "vlatest", "VLatest"])
    def test_latest_uses_metadata(self, metadata, spec):
        resolver = VersionResolver(metadata=metadata)

        assert resolver.resolve(spec) == "5.0.0"
        metadata.get_latest_release_tag.assert_called_once_with(
            "Orange-OpenSource", "hurl"
        )

    def test_latest_tag_without_prefix(self, metadata):
        metadata.get_latest_release_tag.return_value = "4.3.0"

        assert VersionResolver(metadata=metadata).resolve("latest") == "4.3.0"

    def test_lookup_failure_propagates(self, metadata):
        metadata.get_latest_release_tag.side_effect = MetadataLookupError(
            "Orange-OpenSource/hurl", "HTTP 500"
        )

        with pytest.raises(MetadataLookupError):
            VersionResolver(metadata=metadata).resolve("latest")

    def test_default_client_gets_token(self):
        with patch("hurlkit.release.resolver.GitHubReleaseClient") as client_cls:
            client_cls.return_value.get_latest_release_tag.return_value = "4.3.0"

            version = VersionResolver().resolve("latest", auth_token="secret")

        assert version == "4.3.0"
        client_cls.assert_called_once_with(token="secret")
