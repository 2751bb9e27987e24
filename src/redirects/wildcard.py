"""Derivation of ``:version`` wildcard rules from literal per-version redirects.

Hosting platforms with splat support evaluate static rules first and pattern
rules after them, so per-version rules sharing one shape can collapse into a
single ``/prefix/:version/...`` rule. A wildcard carries the exact literal
text around the version in both source and destination, so substituting any
of its member versions reproduces that member's rule verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from constants import Constants

from .models import Redirect, RedirectKind

logger = logging.getLogger(__name__)

FromComponents = Tuple[str, str]
ToComponents = Tuple[str, ...]


@dataclass
class Wildcard:
    """A pattern rule standing in for several literal redirects."""
    kind: RedirectKind
    # The version shows up once in "from", so two components
    from_components: FromComponents
    to_components: ToComponents
    matching_redirects: List[Redirect] = field(default_factory=list)

    @property
    def pattern_from(self) -> str:
        start, end = self.from_components
        return f"{start}{Constants.VERSION_PLACEHOLDER}{end}"

    @property
    def pattern_to(self) -> str:
        return Constants.VERSION_PLACEHOLDER.join(self.to_components)

    def expand(self, version_text: str) -> Tuple[str, str]:
        """Return the ``(from, to)`` pair this wildcard yields for one version."""
        start, end = self.from_components
        return f"{start}{version_text}{end}", version_text.join(self.to_components)

    def sort_key(self) -> Tuple[int, FromComponents]:
        return (self.kind.value, self.from_components)

    def __str__(self) -> str:
        return f"{self.pattern_from} {self.pattern_to} {Constants.REDIRECT_CODE}"


def split_from(redirect: Redirect) -> Optional[FromComponents]:
    """Split a redirect source around its version, or None if it cannot be a wildcard.

    Only concrete versions qualify. The first occurrence of the version text
    must also fill a whole path segment, since ``:version`` matches exactly
    one segment.
    """
    if not redirect.version.is_version:
        return None
    version_text = str(redirect.version)
    start, sep, end = redirect.from_.partition(version_text)
    if not sep:
        return None
    if not start.endswith("/") or not (end == "" or end.startswith("/")):
        return None
    return start, end


def split_to(redirect: Redirect) -> ToComponents:
    """Split a redirect destination on every occurrence of its version text."""
    return tuple(redirect.to.split(str(redirect.version)))


class WildcardStore:
    """Wildcards plus the literal redirects they do not cover.

    Together the two lists cover the input exactly: nothing dropped,
    nothing duplicated.
    """

    def __init__(self, wildcards: List[Wildcard], unmatched: List[Redirect]):
        self.wildcards = wildcards
        self.unmatched = unmatched

    @classmethod
    def build(cls, redirects: Sequence[Redirect]) -> "WildcardStore":
        """Group per-version redirects by shape and emit the dominant pattern per source shape."""
        # from_components -> ((kind, to_components) -> redirects)
        url_matches: Dict[FromComponents, Dict[Tuple[RedirectKind, ToComponents], List[Redirect]]] = {}
        unmatched: List[Redirect] = []

        # Sorting first makes the first-seen tie-break below deterministic.
        for redirect in sorted(redirects):
            from_components = split_from(redirect)
            if from_components is None:
                unmatched.append(redirect)
                continue
            to_key = (redirect.kind, split_to(redirect))
            url_matches.setdefault(from_components, {}).setdefault(to_key, []).append(redirect)

        wildcards: List[Wildcard] = []
        for from_components, to_maps in url_matches.items():
            best_key = None
            best_redirects: List[Redirect] = []
            for to_key, members in to_maps.items():
                if best_key is None or len(members) > len(best_redirects):
                    best_key = to_key
                    best_redirects = members

            kind, to_components = best_key
            wildcards.append(Wildcard(
                kind=kind,
                from_components=from_components,
                to_components=to_components,
                matching_redirects=list(best_redirects),
            ))

            # Everything else with this source shape stays literal.
            for to_key, members in to_maps.items():
                if to_key != best_key:
                    unmatched.extend(members)

        wildcards.sort(key=Wildcard.sort_key)
        unmatched.sort()

        for wildcard in wildcards:
            logger.info(
                "found wildcard (matches %d redirects): %s",
                len(wildcard.matching_redirects),
                wildcard,
            )

        return cls(wildcards, unmatched)

    def covered_redirects(self) -> List[Redirect]:
        """All literal redirects the wildcards stand in for, in wildcard order."""
        return [r for wildcard in self.wildcards for r in wildcard.matching_redirects]
