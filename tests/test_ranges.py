"""Tests for latest-pointer bookkeeping."""

import semantic_version

from metadata.models import (
    Project,
    ReleaseLocation,
    ReleaseRangeData,
    ReleasesJson,
    ReleaseStatus,
    ReleaseVersionData,
    VersionRange,
)
from metadata.ranges import add_version, range_for_version, recompute_latest, recompute_range
from redirects.enumerate import build_redirects


def V(text):
    return semantic_version.Version(text)


def _range(*versions, yanked=()):
    return ReleaseRangeData(
        latest=V(versions[0]),
        is_prerelease=False,
        versions={
            V(v): ReleaseVersionData(
                release_url=f"https://dl/{v}",
                status=ReleaseStatus.YANKED if v in yanked else ReleaseStatus.ACTIVE,
            )
            for v in versions
        },
    )


def test_range_for_version():
    assert range_for_version(V("3.1.4")) == VersionRange.parse("3")
    assert range_for_version(V("0.4.1")) == VersionRange.parse("0.4")
    assert range_for_version(V("0.0.2")) == VersionRange.parse("0.0.2")


def test_recompute_prefers_stable():
    data = _range("1.0.0", "1.1.0", "1.2.0-rc.1")
    recompute_range(data)
    assert data.latest == V("1.1.0")
    assert not data.is_prerelease


def test_recompute_skips_yanked():
    data = _range("1.0.0", "1.1.0", yanked=("1.1.0",))
    recompute_range(data)
    assert data.latest == V("1.0.0")


def test_recompute_prerelease_only_range():
    data = _range("2.0.0-beta.1", "2.0.0-rc.1")
    recompute_range(data)
    assert data.latest == V("2.0.0-rc.1")
    assert data.is_prerelease


def test_recompute_all_yanked_falls_back_to_highest():
    data = _range("1.0.0", "1.1.0", yanked=("1.0.0", "1.1.0"))
    recompute_range(data)
    assert data.latest == V("1.1.0")


def test_recompute_latest_ignores_prerelease_ranges():
    stable = _range("1.0.0")
    pre = _range("2.0.0-rc.1")
    recompute_range(pre)
    project = Project(ranges={VersionRange.parse("1"): stable, VersionRange.parse("2"): pre})
    assert recompute_latest(project) == VersionRange.parse("1")
    assert recompute_latest(Project(ranges={VersionRange.parse("2"): pre})) is None


def test_add_version_creates_project_and_range():
    releases = ReleasesJson()
    loc = ReleaseLocation(target="linux", format="tar.gz", url="https://dl/0.9.0/linux.tar.gz")
    rng = add_version(releases, "tool", V("0.9.0"), "https://dl/0.9.0", [loc])
    assert rng == VersionRange.parse("0.9")
    project = releases.projects["tool"]
    assert project.latest == rng
    assert project.ranges[rng].latest == V("0.9.0")
    assert project.ranges[rng].latest_data().locations == [loc]


def test_add_version_updates_pointers(releases):
    add_version(releases, "tool", V("1.3.0"), "https://dl/1.3.0/release", [])
    add_version(releases, "tool", V("1.4.0-rc.1"), "https://dl/1.4.0-rc.1/release", [])
    project = releases.projects["tool"]
    range_one = project.ranges[VersionRange.parse("1")]
    assert range_one.latest == V("1.3.0")
    assert list(range_one.versions)[-1] == V("1.4.0-rc.1")

    add_version(releases, "tool", V("2.0.0"), "https://dl/2.0.0/release", [])
    range_two = project.ranges[VersionRange.parse("2")]
    assert range_two.latest == V("2.0.0")
    assert not range_two.is_prerelease
    assert project.latest == VersionRange.parse("2")


def test_add_version_keeps_ranges_sorted(releases):
    add_version(releases, "tool", V("0.5.0"), "https://dl/0.5.0/release", [])
    assert [str(r) for r in releases.projects["tool"].ranges] == ["0.5", "1", "2"]


def test_add_version_replaces_existing(releases):
    add_version(releases, "tool", V("1.2.0"), "https://new/1.2.0", [])
    data = releases.projects["tool"].ranges[VersionRange.parse("1")].versions[V("1.2.0")]
    assert data.release_url == "https://new/1.2.0"
    assert data.locations == []


def test_recompute_yanked_stable_with_active_prerelease():
    data = _range("1.0.0", "1.1.0-rc.1", yanked=("1.0.0",))
    recompute_range(data)
    assert data.latest == V("1.1.0-rc.1")
    assert data.is_prerelease


def test_release_candidate_never_becomes_stable_latest():
    releases = ReleasesJson()
    add_version(releases, "tool", V("1.0.0"), "https://dl/1.0.0/release", [], ReleaseStatus.YANKED)
    add_version(releases, "tool", V("1.1.0-rc.1"), "https://dl/1.1.0-rc.1/release", [])
    project = releases.projects["tool"]
    assert project.ranges[VersionRange.parse("1")].is_prerelease
    assert project.latest is None

    sources = [r.from_ for r in build_redirects(project, [], "/dl")]
    assert "/dl/latest/release" not in sources
    assert "/dl/1/release" not in sources
    assert "/dl/1.1.0-rc.1/release" in sources


def test_versions_differing_in_build_metadata_sort_deterministically():
    releases = ReleasesJson()
    add_version(releases, "tool", V("1.0.0+b"), "https://dl/b", [])
    add_version(releases, "tool", V("1.0.0+a"), "https://dl/a", [])
    range_one = releases.projects["tool"].ranges[VersionRange.parse("1")]
    assert [str(v) for v in range_one.versions] == ["1.0.0+a", "1.0.0+b"]
    assert range_one.latest == V("1.0.0+b")
