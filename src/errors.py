"""Exception taxonomy for relroute.

Library code raises these; the CLI maps them onto process exit codes.
"""

from __future__ import annotations

from constants import ExitCodes


class RelrouteError(Exception):
    """Base error carrying the exit code the CLI should use."""

    exit_code = ExitCodes.INPUT_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InputShapeError(RelrouteError):
    """The release document does not have the shape the generator needs."""


class MetadataError(RelrouteError):
    """The release document could not be read, parsed or validated."""


class ConfigError(RelrouteError):
    """The configuration file or a CLI value is malformed."""


class OutputError(RelrouteError):
    """An output file could not be written."""

    exit_code = ExitCodes.FILE_ERROR
