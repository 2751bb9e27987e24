"""Data models for the release-history document."""

from __future__ import annotations

import functools
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import semantic_version

_RANGE_RE = re.compile(r"^(0|[1-9]\d*)(?:\.(0|[1-9]\d*))?(?:\.(0|[1-9]\d*))?$")


class RangeLevel(Enum):
    """Granularity of a version range; declaration order is sort order."""
    PATCH = 0
    MINOR = 1
    MAJOR = 2


class ReleaseStatus(Enum):
    """Publication status of a single version."""
    ACTIVE = "active"
    YANKED = "yanked"


def version_sort_key(version: semantic_version.Version) -> Tuple[Any, ...]:
    """Total sort key for versions: semver precedence, then the full text.

    ``Version.__lt__`` ignores build metadata while ``__eq__`` does not, so
    ``1.0.0+a`` and ``1.0.0+b`` compare neither equal nor ordered.
    """
    return (version.precedence_key, str(version))


@functools.total_ordering
@dataclass(frozen=True)
class VersionRange:
    """A release family: ``1`` (major), ``0.3`` (minor) or ``0.0.4`` (patch).

    Semver treats every 0.x minor and every 0.0.x patch as potentially
    breaking, so those get their own range instead of folding into ``0``.
    """
    level: RangeLevel
    number: int

    @classmethod
    def from_version(cls, version: semantic_version.Version) -> "VersionRange":
        """Return the range a version belongs to."""
        if version.major > 0:
            return cls(RangeLevel.MAJOR, version.major)
        if version.minor > 0:
            return cls(RangeLevel.MINOR, version.minor)
        return cls(RangeLevel.PATCH, version.patch)

    @classmethod
    def parse(cls, text: str) -> "VersionRange":
        """Parse the text form produced by ``str()``.

        Raises:
            ValueError: If ``text`` is not a canonical range.
        """
        m = _RANGE_RE.match(str(text).strip())
        if not m:
            raise ValueError(f"invalid version range: {text!r}")
        major, minor, patch = m.group(1), m.group(2), m.group(3)
        if patch is not None:
            if major != "0" or minor != "0":
                raise ValueError(f"invalid version range: {text!r} (patch ranges look like 0.0.N)")
            return cls(RangeLevel.PATCH, int(patch))
        if minor is not None:
            if major != "0" or minor == "0":
                raise ValueError(f"invalid version range: {text!r} (minor ranges look like 0.N)")
            return cls(RangeLevel.MINOR, int(minor))
        if major == "0":
            raise ValueError(f"invalid version range: {text!r} (major ranges start at 1)")
        return cls(RangeLevel.MAJOR, int(major))

    def contains(self, version: semantic_version.Version) -> bool:
        """Return True if ``version`` belongs to this range."""
        return VersionRange.from_version(version) == self

    def sort_key(self) -> Tuple[int, int]:
        return (self.level.value, self.number)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, VersionRange):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.level == RangeLevel.MAJOR:
            return str(self.number)
        if self.level == RangeLevel.MINOR:
            return f"0.{self.number}"
        return f"0.0.{self.number}"


@dataclass
class ReleaseLocation:
    """One downloadable artifact of a version."""
    target: str
    format: str
    url: str
    checksums: Dict[str, str] = field(default_factory=dict)


@dataclass
class ReleaseVersionData:
    """Everything published for a single version."""
    release_url: str
    status: ReleaseStatus = ReleaseStatus.ACTIVE
    locations: List[ReleaseLocation] = field(default_factory=list)
    metadata: Optional[Any] = None


@dataclass
class ReleaseRangeData:
    """All versions of one range plus its latest pointer."""
    latest: semantic_version.Version
    is_prerelease: bool
    versions: Dict[semantic_version.Version, ReleaseVersionData] = field(default_factory=dict)

    def latest_data(self) -> ReleaseVersionData:
        """Data of the version the ``latest`` pointer names."""
        return self.versions[self.latest]


@dataclass
class Project:
    """Release history of one project."""
    latest: Optional[VersionRange] = None
    ranges: Dict[VersionRange, ReleaseRangeData] = field(default_factory=dict)


@dataclass
class ReleasesJson:
    """Top-level release document."""
    projects: Dict[str, Project] = field(default_factory=dict)
    format_version: int = 1
