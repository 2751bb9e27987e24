"""Latest-pointer bookkeeping for ranges and projects."""

from __future__ import annotations

import logging
from typing import Iterable, Optional

import semantic_version

from .models import (
    Project,
    ReleaseLocation,
    ReleaseRangeData,
    ReleasesJson,
    ReleaseStatus,
    ReleaseVersionData,
    VersionRange,
    version_sort_key,
)

logger = logging.getLogger(__name__)


def range_for_version(version: semantic_version.Version) -> VersionRange:
    """Return the range ``version`` belongs to."""
    return VersionRange.from_version(version)


def recompute_range(range_data: ReleaseRangeData) -> None:
    """Recompute ``latest`` and ``is_prerelease`` of a range in place.

    Latest is the highest active stable version, falling back to the highest
    active version and then to the highest version overall. A range is a
    prerelease range whenever its latest is a prerelease.
    """
    versions = list(range_data.versions)
    if not versions:
        raise ValueError("cannot compute latest of an empty range")
    active = [v for v in versions if range_data.versions[v].status == ReleaseStatus.ACTIVE]
    stable_active = [v for v in active if not v.prerelease]
    if stable_active:
        range_data.latest = max(stable_active, key=version_sort_key)
    elif active:
        range_data.latest = max(active, key=version_sort_key)
    else:
        range_data.latest = max(versions, key=version_sort_key)
    range_data.is_prerelease = bool(range_data.latest.prerelease)


def recompute_latest(project: Project) -> Optional[VersionRange]:
    """Point ``project.latest`` at the highest non-prerelease range (or None)."""
    stable = [r for r, data in project.ranges.items() if not data.is_prerelease]
    project.latest = max(stable) if stable else None
    return project.latest


def add_version(
    releases: ReleasesJson,
    project_name: str,
    version: semantic_version.Version,
    release_url: str,
    locations: Iterable[ReleaseLocation],
    status: ReleaseStatus = ReleaseStatus.ACTIVE,
) -> VersionRange:
    """Insert or replace one version and refresh the affected latest pointers.

    Missing projects and ranges are created. Ranges and versions are kept in
    ascending order so the serialized document stays stable.

    Returns:
        VersionRange: The range the version was filed under.
    """
    project = releases.projects.setdefault(project_name, Project())
    version_range = range_for_version(version)
    range_data = project.ranges.get(version_range)
    if range_data is None:
        range_data = ReleaseRangeData(latest=version, is_prerelease=bool(version.prerelease))
        project.ranges[version_range] = range_data
        logger.info("Created range %s for project %s", version_range, project_name)

    if version in range_data.versions:
        logger.warning("Replacing existing version %s of project %s", version, project_name)
    range_data.versions[version] = ReleaseVersionData(
        release_url=release_url,
        status=status,
        locations=list(locations),
    )
    range_data.versions = {
        v: range_data.versions[v] for v in sorted(range_data.versions, key=version_sort_key)
    }
    project.ranges = dict(sorted(project.ranges.items()))

    recompute_range(range_data)
    recompute_latest(project)
    logger.info(
        "Added %s %s (range %s latest: %s, project latest range: %s)",
        project_name,
        version,
        version_range,
        range_data.latest,
        project.latest,
    )
    return version_range
