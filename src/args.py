"""Argument parsing functionality for relroute."""

import argparse

from constants import Constants


def _add_common_options(parser):
    """Logging options shared by every subcommand."""
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=Constants.LOG_LEVELS,
                        default=None)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)
    parser.add_argument("-q", "--quiet",
                        dest="QUIET",
                        help="Only report errors on the console.",
                        action="store_true")


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog=Constants.PROG,
        description=(
            "relroute - static-hosting redirect rules from a release history"
        ),
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="action", metavar="ACTION")
    subparsers.required = True

    gen = subparsers.add_parser(
        "generate-redirects",
        help="Write a _redirects file for the single project in the release document",
    )
    gen.add_argument("-j", "--json",
                     dest="JSON",
                     help="Release document: a file path or an http(s) URL",
                     action="store",
                     type=str)
    gen.add_argument("-p", "--prefix",
                     dest="PREFIX",
                     help="URL prefix of every redirect source, e.g. /dl (trailing / is stripped)",
                     action="store",
                     type=str)
    gen.add_argument("-o", "--out-dir",
                     dest="OUT_DIR",
                     help="Directory to write the _redirects file into (default: .)",
                     action="store",
                     type=str)
    gen.add_argument("-f", "--flavor",
                     dest="FLAVOR",
                     help=(
                         "Redirect flavor: plain (static rules only, e.g. Netlify) or "
                         "compressed (static rules plus :version wildcards, e.g. Cloudflare)"
                     ),
                     action="store",
                     type=str.lower,
                     choices=Constants.FLAVORS + sorted(Constants.FLAVOR_PLATFORM_ALIASES))
    gen.add_argument("-a", "--alias",
                     dest="ALIASES",
                     help="Alias a target/format pair as ALIAS=TARGET.FORMAT (repeatable)",
                     action="append",
                     type=str,
                     default=[])
    gen.add_argument("-c", "--config",
                     dest="CONFIG",
                     help="Path to a YAML configuration file",
                     action="store",
                     type=str)
    _add_common_options(gen)

    add = subparsers.add_parser(
        "add-version",
        help="Record a new version in the release document",
    )
    add.add_argument("-j", "--json",
                     dest="JSON",
                     help="Release document file to update (created if missing)",
                     action="store",
                     type=str,
                     required=True)
    add.add_argument("--project",
                     dest="PROJECT",
                     help="Project name",
                     action="store",
                     type=str,
                     required=True)
    add.add_argument("-v", "--version",
                     dest="VERSION",
                     help="Semantic version being released",
                     action="store",
                     type=str,
                     required=True)
    add.add_argument("--release-url",
                     dest="RELEASE_URL",
                     help="Canonical release page URL",
                     action="store",
                     type=str,
                     required=True)
    add.add_argument("-l", "--location",
                     dest="LOCATIONS",
                     help="Artifact as TARGET:FORMAT:URL (repeatable)",
                     action="append",
                     type=str,
                     default=[])
    add.add_argument("--status",
                     dest="STATUS",
                     help="Release status",
                     action="store",
                     type=str.lower,
                     choices=["active", "yanked"],
                     default="active")
    _add_common_options(add)

    return parser.parse_args(argv)
