"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    FILE_ERROR = 1
    CONNECTION_ERROR = 2
    INPUT_ERROR = 4


class RedirectFlavor(Enum):
    """Redirect output dialects.

    Args:
        Enum (string): Flavor names accepted on the command line.
    """

    PLAIN = "plain"
    COMPRESSED = "compressed"

    @classmethod
    def from_name(cls, name: str) -> "RedirectFlavor":
        """Resolve a flavor name, accepting the hosting platform names too."""
        key = str(name).strip().lower()
        key = Constants.FLAVOR_PLATFORM_ALIASES.get(key, key)
        return cls(key)


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    PROG = "relroute"
    REDIRECTS_FILE = "_redirects"
    REDIRECT_CODE = 302
    VERSION_PLACEHOLDER = ":version"
    FLAVORS = [RedirectFlavor.PLAIN.value, RedirectFlavor.COMPRESSED.value]
    FLAVOR_PLATFORM_ALIASES = {
        "netlify": RedirectFlavor.PLAIN.value,
        "cloudflare": RedirectFlavor.COMPRESSED.value,
    }
    RELEASES_FORMAT_VERSION = 1
    LOG_FORMAT = "[%(levelname)s] %(message)s"
    LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    ENV_LOG_LEVEL = "RELROUTE_LOG_LEVEL"
    ENV_CONFIG = "RELROUTE_CONFIG"

    DEFAULT_PREFIX = ""
    DEFAULT_OUT_DIR = "."
    DEFAULT_FLAVOR = RedirectFlavor.PLAIN.value
