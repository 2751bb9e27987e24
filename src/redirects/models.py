"""Data models for redirect rules."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional, Tuple

import semantic_version

from constants import Constants
from metadata.models import VersionRange, version_sort_key


class TagKind(Enum):
    """Discriminator of a VersionTag; declaration order is sort order."""
    LATEST = 0
    RANGE = 1
    VERSION = 2


class RedirectKind(Enum):
    """Kind of a redirect rule; declaration order is sort and priority order."""
    RELEASE = 0
    LOCATION = 1
    ALIAS = 2


@functools.total_ordering
@dataclass(frozen=True)
class VersionTag:
    """Which release a redirect points into: the global latest, a range's latest, or one version.

    Build instances with ``latest()``, ``for_range()`` or ``for_version()``;
    exactly the payload matching ``kind`` is set.
    """
    kind: TagKind
    range: Optional[VersionRange] = None
    version: Optional[semantic_version.Version] = None

    @classmethod
    def latest(cls) -> "VersionTag":
        return cls(TagKind.LATEST)

    @classmethod
    def for_range(cls, version_range: VersionRange) -> "VersionTag":
        return cls(TagKind.RANGE, range=version_range)

    @classmethod
    def for_version(cls, version: semantic_version.Version) -> "VersionTag":
        return cls(TagKind.VERSION, version=version)

    @property
    def is_version(self) -> bool:
        return self.kind == TagKind.VERSION

    def sort_key(self) -> Tuple[Any, ...]:
        """Latest < ranges < versions; ties fall back to the text form."""
        if self.kind == TagKind.LATEST:
            return (self.kind.value,)
        if self.kind == TagKind.RANGE:
            return (self.kind.value, self.range.sort_key(), str(self))
        return (self.kind.value, version_sort_key(self.version))

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, VersionTag):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        if self.kind == TagKind.LATEST:
            return "latest"
        if self.kind == TagKind.RANGE:
            return str(self.range)
        return str(self.version)


@functools.total_ordering
@dataclass(frozen=True)
class Redirect:
    """One literal routing rule ``from_ -> to``.

    Ordered by ``(version, kind, from_)``; ``to`` and ``code`` only break
    ties so that the order is total.
    """
    version: VersionTag
    kind: RedirectKind
    from_: str
    to: str
    code: int = Constants.REDIRECT_CODE

    def sort_key(self) -> Tuple[Any, ...]:
        return (self.version.sort_key(), self.kind.value, self.from_, self.to, self.code)

    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, Redirect):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    def __str__(self) -> str:
        return f"{self.from_} {self.to} {self.code}"


@dataclass(frozen=True)
class Alias:
    """Short name standing in for one (target, format) pair."""
    target: str
    format: str
    alias: str

    def __post_init__(self) -> None:
        if "/" in self.alias:
            raise ValueError(f"invalid alias {self.alias!r}, alias must be a single path segment")

    @property
    def target_format(self) -> Tuple[str, str]:
        return (self.target, self.format)

    def matches(self, target: str, fmt: str) -> bool:
        """Return True if this alias names the given target and format."""
        return self.target == target and self.format == fmt

    @classmethod
    def parse(cls, text: str) -> "Alias":
        """Parse ``ALIAS=TARGET.FORMAT``; the target ends at its first dot.

        Raises:
            ValueError: If any of the three parts is missing or the alias contains "/".
        """
        raw = str(text).strip()
        alias, sep, target_format = raw.partition("=")
        target, dot, fmt = target_format.strip().partition(".")
        alias, target, fmt = alias.strip(), target.strip(), fmt.strip()
        if not sep or not dot or not alias or not target or not fmt:
            raise ValueError(f"invalid alias {text!r}, expected ALIAS=TARGET.FORMAT")
        return cls(target=target, format=fmt, alias=alias)

    def __str__(self) -> str:
        return f"{self.alias}={self.target}.{self.format}"
