"""Redirect rule enumeration, wildcard compression and rendering."""

from .enumerate import build_redirects, normalize_prefix
from .generate import generate_redirects, generate_redirects_text
from .models import Alias, Redirect, RedirectKind, TagKind, VersionTag
from .render import render_redirects
from .wildcard import Wildcard, WildcardStore

__all__ = [
    "Alias",
    "Redirect",
    "RedirectKind",
    "TagKind",
    "VersionTag",
    "Wildcard",
    "WildcardStore",
    "build_redirects",
    "generate_redirects",
    "generate_redirects_text",
    "normalize_prefix",
    "render_redirects",
]
