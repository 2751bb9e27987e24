"""Shared fixtures for relroute tests."""

import copy
import json
import logging

import pytest

from common import logging_utils
from metadata.loader import parse_releases
from redirects.models import Alias


def version_entry(version, targets=(("linux", "tar.gz"),), base="https://dl"):
    """Release document entry for one version with artifacts under ``{base}/{version}/``."""
    return {
        "release-url": f"{base}/{version}/release",
        "status": "active",
        "locations": [
            {"target": target, "format": fmt, "url": f"{base}/{version}/{target}.{fmt}"}
            for target, fmt in targets
        ],
    }


SAMPLE_DOC = {
    "format-version": 1,
    "projects": {
        "tool": {
            "latest": "1",
            "ranges": {
                "1": {
                    "latest": "1.2.0",
                    "is-prerelease": False,
                    "versions": {
                        "1.0.0": version_entry("1.0.0"),
                        "1.1.0": version_entry("1.1.0"),
                        "1.2.0": version_entry("1.2.0"),
                    },
                },
                "2": {
                    "latest": "2.0.0-rc.1",
                    "is-prerelease": True,
                    "versions": {
                        "2.0.0-rc.1": version_entry("2.0.0-rc.1"),
                    },
                },
            },
        }
    },
}


@pytest.fixture
def sample_doc():
    """A fresh copy of the sample release document."""
    return copy.deepcopy(SAMPLE_DOC)


@pytest.fixture
def releases(sample_doc):
    return parse_releases(sample_doc)


@pytest.fixture
def project(releases):
    return releases.projects["tool"]


@pytest.fixture
def aliases():
    return [Alias(target="linux", format="tar.gz", alias="linux-x64")]


@pytest.fixture
def sample_json(tmp_path, sample_doc):
    """The sample document written to a file."""
    path = tmp_path / "releases.json"
    path.write_text(json.dumps(sample_doc), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers installed by configure_logging so they never outlive a test."""
    yield
    root = logging.getLogger()
    while logging_utils._installed_handlers:  # pylint: disable=protected-access
        handler = logging_utils._installed_handlers.pop()  # pylint: disable=protected-access
        root.removeHandler(handler)
        handler.close()
    root.setLevel(logging.WARNING)
