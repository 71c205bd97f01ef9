"""
Loose semantic version parsing and comparison.

Release tags of the upstream project span several years and include
two-component versions (e.g. "1.7"), so parsing is deliberately loose:
the patch component defaults to 0 and a single leading 'v' is ignored.
"""

import re
from typing import Union

from hurlkit.core.exceptions import InvalidVersionError

_VERSION_RE = re.compile(
    r"^(\d+)\.(\d+)(?:\.(\d+))?(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)


class Version:
    """
    Semantic version parser and comparator.

    Supports versions in format: major.minor[.patch][-prerelease][+build]
    Examples: "4.3.0", "1.7", "v5.0.0", "4.0.0-rc1"

    A pre-release sorts before the release it precedes; build metadata is
    ignored.

    Example:
        >>> Version("4.1") < Version("4.1.1")
        True
        >>> Version("4.3.0-rc1") < Version("4.3.0")
        True
    """

    def __init__(self, version_string: str):
        """
        Parse version string.

        Args:
            version_string: Version text, optionally prefixed with 'v'

        Raises:
            InvalidVersionError: If version format is invalid
        """
        self.original = version_string
        self.major, self.minor, self.patch, self.prerelease = self._parse(
            version_string
        )

    def _parse(self, version_string: str) -> tuple:
        if not isinstance(version_string, str):
            raise InvalidVersionError(f"Invalid version: {version_string!r}")

        text = version_string.strip()
        if text[:1] in ("v", "V"):
            text = text[1:]

        match = _VERSION_RE.match(text)
        if not match:
            raise InvalidVersionError(
                f"Invalid version format: {version_string}. "
                f"Expected format: major.minor.patch or major.minor"
            )

        major, minor, patch, prerelease = match.groups()
        return int(major), int(minor), int(patch or 0), prerelease

    def _key(self) -> tuple:
        # A release (no prerelease) sorts after any of its prereleases
        if self.prerelease is None:
            return (self.major, self.minor, self.patch, 1, ())
        parts = tuple(
            (0, int(p), "") if p.isdigit() else (1, 0, p)
            for p in self.prerelease.split(".")
        )
        return (self.major, self.minor, self.patch, 0, parts)

    def __lt__(self, other: "Version") -> bool:
        return self._key() < other._key()

    def __le__(self, other: "Version") -> bool:
        return self._key() <= other._key()

    def __gt__(self, other: "Version") -> bool:
        return self._key() > other._key()

    def __ge__(self, other: "Version") -> bool:
        return self._key() >= other._key()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def __str__(self) -> str:
        text = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            text += f"-{self.prerelease}"
        return text

    def __repr__(self) -> str:
        return f"Version('{self}')"


def parse_version(value: Union[str, Version]) -> Version:
    """Return ``value`` as a :class:`Version`, parsing strings."""
    if isinstance(value, Version):
        return value
    return Version(value)


def strip_v_prefix(value: str) -> str:
    """Strip a single leading 'v' or 'V' from a version string."""
    if value[:1] in ("v", "V"):
        return value[1:]
    return value


__all__ = [
    "Version",
    "parse_version",
    "strip_v_prefix",
]
