"""HTTP helpers for reading release documents published on the web.

Encapsulates request/timeout error handling so callers only deal with the
decoded payload.
"""
from __future__ import annotations

import json
import logging
import sys
from typing import Any

import requests

from constants import Constants, ExitCodes
from common.logging_utils import extra_context, is_debug_enabled, safe_url, Timer
from errors import MetadataError

logger = logging.getLogger(__name__)


def is_http_url(source: str) -> bool:
    """Return True if ``source`` looks like an http(s) URL rather than a path."""
    lower = str(source).strip().lower()
    return lower.startswith("http://") or lower.startswith("https://")


def safe_get(url: str, *, context: str, **kwargs: Any) -> requests.Response:
    """GET ``url``; a timeout or connection failure ends the run with CONNECTION_ERROR."""
    target = safe_url(url)
    with Timer() as t:
        try:
            res = requests.get(url, timeout=Constants.REQUEST_TIMEOUT, **kwargs)
        except requests.Timeout:
            logger.error("%s: %s timed out after %ss", context, target, Constants.REQUEST_TIMEOUT)
            sys.exit(ExitCodes.CONNECTION_ERROR.value)
        except requests.RequestException as exc:
            logger.error("%s: cannot reach %s: %s", context, target, exc)
            sys.exit(ExitCodes.CONNECTION_ERROR.value)
    if is_debug_enabled(logger):
        logger.debug(
            "Fetched %s",
            target,
            extra=extra_context(
                event="fetch",
                component="http_client",
                status_code=res.status_code,
                duration_ms=t.duration_ms(),
                context=context,
            ),
        )
    return res


def fetch_json(url: str, *, context: str) -> Any:
    """GET ``url`` and decode its JSON body.

    Raises:
        MetadataError: On a non-200 status or an undecodable body.
    """
    res = safe_get(url, context=context)
    if res.status_code != 200:
        raise MetadataError(
            f"{context}: GET {safe_url(url)} returned HTTP {res.status_code}"
        )
    try:
        return json.loads(res.text)
    except json.JSONDecodeError as exc:
        if is_debug_enabled(logger):
            logger.debug(
                "JSON decode error",
                extra=extra_context(
                    event="parse",
                    component="http_client",
                    action="fetch_json",
                    outcome="json_decode_error",
                    target=safe_url(url)
                )
            )
        raise MetadataError(f"{context}: {safe_url(url)} is not valid JSON: {exc}") from exc
