"""Serialization of redirect rules into ``_redirects`` file text."""

from __future__ import annotations

import logging
from typing import List, Sequence

from constants import Constants, RedirectFlavor

from .models import Redirect
from .wildcard import WildcardStore

logger = logging.getLogger(__name__)


def render_header(flavor: RedirectFlavor) -> str:
    return f"# Generated by {Constants.PROG} with redirect flavor {flavor.value}\n\n"


def render_lines(redirects: Sequence[Redirect], flavor: RedirectFlavor) -> List[str]:
    """Return the rule lines (without header) for the chosen flavor.

    Plain output keeps enumeration order. Compressed output lists the
    remaining literal rules first, then the wildcards, because the routing
    engines are first-match-wins and a literal rule is always the more
    specific match.
    """
    if flavor == RedirectFlavor.PLAIN:
        return [str(redirect) for redirect in redirects]

    store = WildcardStore.build(redirects)
    lines = [str(redirect) for redirect in store.unmatched]
    lines.extend(str(wildcard) for wildcard in store.wildcards)
    logger.info(
        "Compressed %d redirects into %d literal and %d wildcard rules",
        len(redirects),
        len(store.unmatched),
        len(store.wildcards),
    )
    return lines


def render_redirects(redirects: Sequence[Redirect], flavor: RedirectFlavor) -> str:
    """Render the complete file text: header, blank line, one rule per line."""
    parts = [render_header(flavor)]
    parts.extend(f"{line}\n" for line in render_lines(redirects, flavor))
    return "".join(parts)
