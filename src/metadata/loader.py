"""Reading and writing the release-history JSON document.

The on-disk format uses kebab-case keys:

    {
      "format-version": 1,
      "projects": {
        "<name>": {
          "latest": "<range>",
          "ranges": {
            "<range>": {
              "latest": "<version>",
              "is-prerelease": false,
              "versions": {
                "<version>": {
                  "release-url": "...",
                  "status": "active",
                  "locations": [{"target": "...", "format": "...", "url": "..."}]
                }
              }
            }
          }
        }
      }
    }
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import semantic_version

from common.atomic import atomic_write_text
from common.http_client import fetch_json, is_http_url
from common.logging_utils import extra_context, is_debug_enabled, safe_url
from errors import MetadataError

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
from .schema import validate_document

logger = logging.getLogger(__name__)


def _parse_version(text: str, where: str) -> semantic_version.Version:
    try:
        return semantic_version.Version(text)
    except ValueError as exc:
        raise MetadataError(f"{where}: invalid version {text!r}") from exc


def _parse_range(text: str, where: str) -> VersionRange:
    try:
        return VersionRange.parse(text)
    except ValueError as exc:
        raise MetadataError(f"{where}: {exc}") from exc


def _parse_version_data(raw: Dict[str, Any]) -> ReleaseVersionData:
    locations = [
        ReleaseLocation(
            target=loc["target"],
            format=loc["format"],
            url=loc["url"],
            checksums=dict(loc.get("checksums") or {}),
        )
        for loc in raw.get("locations", [])
    ]
    return ReleaseVersionData(
        release_url=raw["release-url"],
        status=ReleaseStatus(raw.get("status", ReleaseStatus.ACTIVE.value)),
        locations=locations,
        metadata=raw.get("metadata"),
    )


def _parse_project(name: str, raw: Dict[str, Any]) -> Project:
    ranges: Dict[VersionRange, ReleaseRangeData] = {}
    for range_text, range_raw in raw.get("ranges", {}).items():
        where = f"project {name}, range {range_text}"
        version_range = _parse_range(range_text, where)
        versions: Dict[semantic_version.Version, ReleaseVersionData] = {}
        for version_text, version_raw in range_raw["versions"].items():
            version = _parse_version(version_text, where)
            if not version_range.contains(version):
                raise MetadataError(f"{where}: version {version} does not belong to this range")
            versions[version] = _parse_version_data(version_raw)
        latest = _parse_version(range_raw["latest"], where)
        if latest not in versions:
            raise MetadataError(f"{where}: latest version {latest} is not listed in versions")
        ranges[version_range] = ReleaseRangeData(
            latest=latest,
            is_prerelease=bool(range_raw["is-prerelease"]),
            versions=versions,
        )

    latest_range = None
    if raw.get("latest") is not None:
        latest_range = _parse_range(raw["latest"], f"project {name}")
        if latest_range not in ranges:
            raise MetadataError(f"project {name}: latest range {latest_range} is not listed in ranges")
    return Project(latest=latest_range, ranges=ranges)


def parse_releases(data: Any) -> ReleasesJson:
    """Validate a decoded document and build the model tree.

    Raises:
        MetadataError: On schema violations or inconsistent latest pointers.
    """
    validate_document(data)
    projects = {
        name: _parse_project(name, raw)
        for name, raw in data["projects"].items()
    }
    return ReleasesJson(
        projects=projects,
        format_version=int(data.get("format-version", 1)),
    )


def _dump_version_data(data: ReleaseVersionData) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "release-url": data.release_url,
        "status": data.status.value,
        "locations": [],
    }
    for loc in data.locations:
        entry: Dict[str, Any] = {"target": loc.target, "format": loc.format, "url": loc.url}
        if loc.checksums:
            entry["checksums"] = dict(loc.checksums)
        out["locations"].append(entry)
    if data.metadata is not None:
        out["metadata"] = data.metadata
    return out


def dump_releases(releases: ReleasesJson) -> Dict[str, Any]:
    """Convert the model tree back to its JSON shape, ranges and versions ascending."""
    projects: Dict[str, Any] = {}
    for name in sorted(releases.projects):
        project = releases.projects[name]
        ranges: Dict[str, Any] = {}
        for version_range in sorted(project.ranges):
            range_data = project.ranges[version_range]
            ranges[str(version_range)] = {
                "latest": str(range_data.latest),
                "is-prerelease": range_data.is_prerelease,
                "versions": {
                    str(version): _dump_version_data(range_data.versions[version])
                    for version in sorted(range_data.versions, key=version_sort_key)
                },
            }
        projects[name] = {
            "latest": str(project.latest) if project.latest is not None else None,
            "ranges": ranges,
        }
    return {"format-version": releases.format_version, "projects": projects}


def load_releases(source: Union[str, Path]) -> ReleasesJson:
    """Load a release document from a file path or an http(s) URL."""
    source = str(source)
    if is_http_url(source):
        logger.info("Fetching release metadata from %s", safe_url(source))
        data = fetch_json(source, context="release metadata")
    else:
        try:
            with open(source, "r", encoding="utf-8") as fh:
                data = json.load(fh)
        except FileNotFoundError as exc:
            raise MetadataError(f"release metadata file not found: {source}") from exc
        except json.JSONDecodeError as exc:
            raise MetadataError(f"release metadata file {source} is not valid JSON: {exc}") from exc
        except OSError as exc:
            raise MetadataError(f"cannot read release metadata file {source}: {exc}") from exc

    releases = parse_releases(data)
    if is_debug_enabled(logger):
        logger.debug(
            "Loaded release metadata",
            extra=extra_context(
                event="parse",
                component="metadata",
                action="load_releases",
                outcome="success",
                count=len(releases.projects),
            )
        )
    return releases


def save_releases(releases: ReleasesJson, path: Union[str, Path]) -> Path:
    """Atomically write the release document as indented JSON."""
    text = json.dumps(dump_releases(releases), indent=2, ensure_ascii=False) + "\n"
    return atomic_write_text(path, text)
