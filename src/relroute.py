"""relroute - static-hosting redirect rules from a release history

    Raises:
        SystemExit: Always, with an ExitCodes value

    Returns:
        int: Exit code
"""
import logging
import os
import sys

import semantic_version

from args import parse_args
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from config import resolve_generate_config
from constants import ExitCodes
from errors import ConfigError, RelrouteError
from metadata.loader import load_releases, save_releases
from metadata.models import ReleaseLocation, ReleasesJson, ReleaseStatus
from metadata.ranges import add_version
from redirects.generate import generate_redirects

logger = logging.getLogger(__name__)


def parse_location(text):
    """Parses a TARGET:FORMAT:URL location argument.

    Args:
        text (str): Location as given on the command line.

    Raises:
        ConfigError: If a part is missing.

    Returns:
        ReleaseLocation: The parsed location.
    """
    parts = str(text).split(":", 2)
    if len(parts) != 3 or not all(p.strip() for p in parts):
        raise ConfigError(f"invalid location {text!r}, expected TARGET:FORMAT:URL")
    target, fmt, url = (p.strip() for p in parts)
    return ReleaseLocation(target=target, format=fmt, url=url)


def run_generate(args):
    """Generates the _redirects file.

    Args:
        args (argparse.Namespace): Parsed arguments of generate-redirects.
    """
    cfg = resolve_generate_config(args)
    logging.info("Loading release metadata from %s", cfg.json)
    releases = load_releases(cfg.json)
    if cfg.aliases:
        logging.info("Aliases: %s", ", ".join(str(a) for a in cfg.aliases))
    path = generate_redirects(releases, cfg.aliases, cfg.flavor, cfg.prefix, cfg.out_dir)
    logging.info("Generated %s (flavor %s)", path, cfg.flavor.value)


def run_add_version(args):
    """Adds a version to the release document, creating the file if needed.

    Args:
        args (argparse.Namespace): Parsed arguments of add-version.
    """
    try:
        version = semantic_version.Version(args.VERSION)
    except ValueError as exc:
        raise ConfigError(f"invalid version {args.VERSION!r}: {exc}") from exc
    locations = [parse_location(text) for text in args.LOCATIONS]

    if os.path.exists(args.JSON):
        releases = load_releases(args.JSON)
    else:
        logging.info("Release document %s not found, starting a new one", args.JSON)
        releases = ReleasesJson()

    add_version(
        releases,
        args.PROJECT,
        version,
        args.RELEASE_URL,
        locations,
        ReleaseStatus(args.STATUS),
    )
    save_releases(releases, args.JSON)
    logging.info("Updated %s", args.JSON)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL, args.LOG_FILE, args.QUIET)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.action)
        )

    try:
        if args.action == "generate-redirects":
            run_generate(args)
        elif args.action == "add-version":
            run_add_version(args)
    except RelrouteError as exc:
        logging.error("%s", exc.message)
        sys.exit(exc.exit_code.value)

    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
