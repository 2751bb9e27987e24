"""Release-history document: models, validation, loading and range bookkeeping."""

from .models import (
    Project,
    RangeLevel,
    ReleaseLocation,
    ReleaseRangeData,
    ReleasesJson,
    ReleaseStatus,
    ReleaseVersionData,
    VersionRange,
    version_sort_key,
)

__all__ = [
    "Project",
    "RangeLevel",
    "ReleaseLocation",
    "ReleaseRangeData",
    "ReleasesJson",
    "ReleaseStatus",
    "ReleaseVersionData",
    "VersionRange",
    "version_sort_key",
]
