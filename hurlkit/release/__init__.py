"""
Release resolution for hurlkit.

Resolves requested versions and computes where the matching hurl
distribution can be downloaded from.
"""

from .metadata import ReleaseMetadataService, GitHubReleaseClient
from .resolver import VersionResolver, is_latest
from .locator import (
    DistributionLocation,
    DistributionLocator,
    DistributionTable,
    load_distribution_table,
)

__all__ = [
    "ReleaseMetadataService",
    "GitHubReleaseClient",
    "VersionResolver",
    "is_latest",
    "DistributionLocation",
    "DistributionLocator",
    "DistributionTable",
    "load_distribution_table",
]
