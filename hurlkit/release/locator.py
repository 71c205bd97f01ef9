"""
Distribution lookup for hurl releases.

This module maps (platform, architecture, version) onto the download URL of
the matching pre-built hurl archive. The upstream project renamed its
artifacts and changed its supported-architecture set several times, so the
mapping is a version-gated rule table loaded from an embedded YAML file
(``hurlkit/data/distributions.yaml``). New naming eras are added to that
file, not to code.
"""

import functools
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

import yaml

from hurlkit.core.exceptions import ConfigError, UnsupportedTargetError
from hurlkit.core.filesystem import archive_format
from hurlkit.core.platform import normalize_arch, normalize_os
from hurlkit.core.version import Version, parse_version

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_URL = "https://github.com"


@dataclass(frozen=True)
class VersionRule:
    """A template that applies from ``since`` (inclusive) onward."""

    since: Version
    """First version the template applies to"""

    template: str
    """Template with a ``{version}`` placeholder"""

    def render(self, version: str) -> str:
        return self.template.format(version=version)


@dataclass(frozen=True)
class DistributionLocation:
    """Where to download a distribution from and how to unpack it."""

    url: str
    """Fully qualified download URL"""

    artifact_name: str
    """Archive file name (last URL component)"""

    archive_format: Optional[str]
    """'tar.gz', 'zip', or None when the name has an unknown suffix"""


@dataclass
class DistributionTable:
    """Artifact naming and archive layout rules for one upstream project."""

    owner: str
    repo: str
    artifacts: Dict[str, List[VersionRule]] = field(default_factory=dict)
    layouts: List[VersionRule] = field(default_factory=list)

    @property
    def platforms(self) -> List[str]:
        """Platforms with at least one target in the table."""
        return sorted({target.split("-", 1)[0] for target in self.artifacts})


def select_rule(
    rules: List[VersionRule], version: Union[str, Version]
) -> Optional[VersionRule]:
    """
    Pick the most recent rule that applies to ``version``.

    Args:
        rules: Candidate rules in any order
        version: Version to match

    Returns:
        The rule with the highest ``since`` not greater than ``version``,
        or None if every rule starts after ``version``

    Raises:
        InvalidVersionError: If ``version`` cannot be parsed
    """
    current = parse_version(version)
    applicable = [rule for rule in rules if rule.since <= current]
    if not applicable:
        return None
    return max(applicable, key=lambda rule: rule.since)


def _parse_rules(entries, key: str, where: str) -> List[VersionRule]:
    if not isinstance(entries, list) or not entries:
        raise ConfigError(f"{where}: expected a non-empty list of rules")

    rules = []
    for entry in entries:
        if not isinstance(entry, dict) or "since" not in entry or key not in entry:
            raise ConfigError(f"{where}: each rule needs 'since' and '{key}'")
        rules.append(
            VersionRule(since=Version(str(entry["since"])), template=str(entry[key]))
        )
    return rules


def load_distribution_table(path: Optional[Path] = None) -> DistributionTable:
    """
    Load a distribution table from YAML.

    Args:
        path: Table file. If None, uses the embedded distributions.yaml

    Returns:
        Parsed DistributionTable

    Raises:
        ConfigError: If the file is missing, malformed, or has invalid rules
    """
    if path is None:
        return _load_default_table()
    return _load_table(Path(path))


@functools.lru_cache(maxsize=1)
def _load_default_table() -> DistributionTable:
    return _load_table(Path(__file__).parent.parent / "data" / "distributions.yaml")


def _load_table(path: Path) -> DistributionTable:
    if not path.exists():
        raise ConfigError(f"Distribution table not found: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    repository = data.get("repository") or {}
    artifacts = data.get("artifacts")
    if not isinstance(artifacts, dict) or not artifacts:
        raise ConfigError(
            f"Invalid distribution table: missing 'artifacts'\nFile: {path}"
        )

    table = DistributionTable(
        owner=repository.get("owner", "Orange-OpenSource"),
        repo=repository.get("name", "hurl"),
        artifacts={
            target: _parse_rules(entries, "artifact", f"{path}: {target}")
            for target, entries in artifacts.items()
        },
        layouts=_parse_rules(data.get("layouts"), "pattern", f"{path}: layouts"),
    )
    logger.debug(f"Loaded distribution table with {len(table.artifacts)} targets")
    return table


class DistributionLocator:
    """
    Compute download locations of hurl distributions.

    Example:
        >>> locator = DistributionLocator()
        >>> locator.locate("linux", "x64", "4.3.0").url
        'https://github.com/Orange-OpenSource/hurl/releases/download/4.3.0/hurl-4.3.0-x86_64-unknown-linux-gnu.tar.gz'
    """

    def __init__(
        self,
        table: Optional[DistributionTable] = None,
        download_url: str = DEFAULT_DOWNLOAD_URL,
    ):
        """
        Initialize locator.

        Args:
            table: Naming rules (embedded table if None)
            download_url: Release host base URL
        """
        self.table = table or load_distribution_table()
        self.download_url = download_url.rstrip("/")

    def artifact_name(self, platform: str, arch: str, version: str) -> str:
        """
        Get the archive file name for a target.

        Raises:
            UnsupportedTargetError: If no artifact exists for the combination
            InvalidVersionError: If ``version`` cannot be parsed
        """
        os_name = normalize_os(platform)
        arch_name = normalize_arch(arch)

        if os_name not in self.table.platforms:
            raise UnsupportedTargetError(platform, arch)

        rules = self.table.artifacts.get(f"{os_name}-{arch_name}")
        if not rules:
            raise UnsupportedTargetError(platform, arch)

        rule = select_rule(rules, version)
        if rule is None:
            raise UnsupportedTargetError(platform, arch, version)

        return rule.render(version)

    def locate(self, platform: str, arch: str, version: str) -> DistributionLocation:
        """
        Get the download location for a target.

        Args:
            platform: Operating system ('linux', 'darwin'/'macos', 'windows'/'win32')
            arch: CPU architecture ('x64', 'arm64' and their aliases)
            version: Resolved version (e.g., "4.3.0")

        Returns:
            DistributionLocation with URL and archive format

        Raises:
            UnsupportedTargetError: If no artifact exists for the combination
            InvalidVersionError: If ``version`` cannot be parsed
        """
        name = self.artifact_name(platform, arch, version)
        url = (
            f"{self.download_url}/{self.table.owner}/{self.table.repo}"
            f"/releases/download/{version}/{name}"
        )
        return DistributionLocation(
            url=url, artifact_name=name, archive_format=archive_format(name)
        )

    def binary_root_pattern(self, version: str) -> str:
        """
        Glob pattern locating the binary root inside an extracted tar.gz.

        Raises:
            InvalidVersionError: If ``version`` cannot be parsed
            ConfigError: If the table has no layout for ``version``
        """
        rule = select_rule(self.table.layouts, version)
        if rule is None:
            raise ConfigError(f"No archive layout rule for version {version}")
        return rule.render(version)


__all__ = [
    "DEFAULT_DOWNLOAD_URL",
    "VersionRule",
    "DistributionLocation",
    "DistributionTable",
    "select_rule",
    "load_distribution_table",
    "DistributionLocator",
]
