"""JSON Schema validation for the release-history document.

Structural checks only: version and range strings are parsed (and rejected)
by the loader.
"""

from __future__ import annotations

from typing import Any, Dict

from jsonschema import Draft7Validator

from errors import MetadataError

_LOCATION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["target", "format", "url"],
    "properties": {
        "target": {"type": "string", "minLength": 1},
        "format": {"type": "string", "minLength": 1},
        "url": {"type": "string", "minLength": 1},
        "checksums": {
            "type": "object",
            "additionalProperties": {"type": "string"},
        },
    },
}

_VERSION_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["release-url", "locations"],
    "properties": {
        "release-url": {"type": "string", "minLength": 1},
        "status": {"enum": ["active", "yanked"]},
        "locations": {"type": "array", "items": _LOCATION_SCHEMA},
        "metadata": {},
    },
}

_RANGE_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["latest", "is-prerelease", "versions"],
    "properties": {
        "latest": {"type": "string"},
        "is-prerelease": {"type": "boolean"},
        "versions": {
            "type": "object",
            "minProperties": 1,
            "additionalProperties": _VERSION_SCHEMA,
        },
    },
}

_PROJECT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "required": ["ranges"],
    "properties": {
        "latest": {"type": ["string", "null"]},
        "ranges": {"type": "object", "additionalProperties": _RANGE_SCHEMA},
    },
}

RELEASES_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["projects"],
    "properties": {
        "format-version": {"type": "integer", "minimum": 1},
        "projects": {"type": "object", "additionalProperties": _PROJECT_SCHEMA},
    },
}


def validate_document(data: Any) -> None:
    """Validate a decoded release document and raise on the first error.

    Raises:
        MetadataError: Naming the JSON path of the first failing node.
    """
    validator = Draft7Validator(RELEASES_SCHEMA)
    errs = sorted(validator.iter_errors(data), key=lambda e: [str(p) for p in e.path])
    if errs:
        first = errs[0]
        path = "/".join([str(p) for p in first.path])
        raise MetadataError(f"invalid release document at '{path}': {first.message}")
