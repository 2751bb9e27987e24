"""End-to-end redirect generation: enumerate, render, write."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

from constants import Constants, RedirectFlavor
from common.atomic import atomic_write_text
from common.logging_utils import extra_context, is_debug_enabled, Timer
from errors import InputShapeError
from metadata.models import Project, ReleasesJson

from .enumerate import build_redirects, normalize_prefix
from .models import Alias
from .render import render_redirects

logger = logging.getLogger(__name__)


def single_project(releases: ReleasesJson) -> Project:
    """Return the only project of the document.

    Raises:
        InputShapeError: If the document holds zero or several projects.
    """
    if len(releases.projects) != 1:
        raise InputShapeError(
            f"{Constants.PROG} currently only supports one project, "
            f"{len(releases.projects)} found"
        )
    return next(iter(releases.projects.values()))


def generate_redirects_text(
    releases: ReleasesJson,
    aliases: Sequence[Alias],
    flavor: RedirectFlavor,
    prefix: str,
) -> str:
    """Build the ``_redirects`` content in memory."""
    project = single_project(releases)
    redirects = build_redirects(project, aliases, normalize_prefix(prefix))
    return render_redirects(redirects, flavor)


def generate_redirects(
    releases: ReleasesJson,
    aliases: Sequence[Alias],
    flavor: RedirectFlavor,
    prefix: str,
    out_dir: Union[str, Path],
) -> Path:
    """Generate the redirects file and atomically replace ``out_dir/_redirects``.

    Returns:
        Path: The file written.

    Raises:
        InputShapeError: Before anything is written, on a wrong project count.
        OutputError: If the file cannot be written.
    """
    with Timer() as t:
        text = generate_redirects_text(releases, aliases, flavor, prefix)
        path = atomic_write_text(Path(out_dir) / Constants.REDIRECTS_FILE, text)

    if is_debug_enabled(logger):
        logger.debug(
            "Redirects written",
            extra=extra_context(
                event="write",
                component="redirects",
                action="generate_redirects",
                outcome="success",
                duration_ms=t.duration_ms(),
                target=str(path),
            )
        )
    logger.info("Wrote %s", path)
    return path
