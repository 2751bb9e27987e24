"""Expansion of a project's release tree into literal redirect rules."""

from __future__ import annotations

import logging
from typing import List, Sequence

from constants import Constants
from common.logging_utils import extra_context, is_debug_enabled
from metadata.models import Project, ReleaseVersionData

from .models import Alias, Redirect, RedirectKind, VersionTag

logger = logging.getLogger(__name__)


def normalize_prefix(prefix: str) -> str:
    """Strip trailing slashes; ``"/"`` and ``""`` both become ``""``."""
    return (prefix or "").rstrip("/")


def append_redirect_list(
    version: VersionTag,
    version_data: ReleaseVersionData,
    aliases: Sequence[Alias],
    prefix: str,
    out: List[Redirect],
) -> None:
    """Append the release, location and alias rules rooted at ``{prefix}/{version}``."""
    root = f"{prefix}/{version}"
    out.append(Redirect(
        version=version,
        kind=RedirectKind.RELEASE,
        from_=f"{root}/release",
        to=version_data.release_url,
        code=Constants.REDIRECT_CODE,
    ))

    for location in version_data.locations:
        out.append(Redirect(
            version=version,
            kind=RedirectKind.LOCATION,
            from_=f"{root}/{location.target}.{location.format}",
            to=location.url,
            code=Constants.REDIRECT_CODE,
        ))
        for alias in aliases:
            if alias.matches(location.target, location.format):
                out.append(Redirect(
                    version=version,
                    kind=RedirectKind.ALIAS,
                    from_=f"{root}/{alias.alias}",
                    to=location.url,
                    code=Constants.REDIRECT_CODE,
                ))


def build_redirects(project: Project, aliases: Sequence[Alias], prefix: str) -> List[Redirect]:
    """Enumerate every literal redirect for a project.

    Order: the global latest tier, then per range (in input order) the
    range-latest tier for non-prerelease ranges followed by one tier per
    version.

    Args:
        project: Release tree of the single project being published.
        aliases: Alias definitions, applied in list order.
        prefix: URL prefix, already normalized (no trailing slash).

    Returns:
        List[Redirect]: Literal rules in enumeration order.
    """
    redirects: List[Redirect] = []

    if project.latest is not None:
        latest_range_data = project.ranges[project.latest]
        append_redirect_list(
            VersionTag.latest(),
            latest_range_data.latest_data(),
            aliases,
            prefix,
            redirects,
        )

    for version_range, data in project.ranges.items():
        if not data.is_prerelease:
            append_redirect_list(
                VersionTag.for_range(version_range),
                data.latest_data(),
                aliases,
                prefix,
                redirects,
            )
        for version, version_data in data.versions.items():
            append_redirect_list(
                VersionTag.for_version(version),
                version_data,
                aliases,
                prefix,
                redirects,
            )

    if is_debug_enabled(logger):
        logger.debug(
            "Enumerated redirects",
            extra=extra_context(
                event="enumerate",
                component="redirects",
                action="build_redirects",
                count=len(redirects),
            )
        )
    return redirects
