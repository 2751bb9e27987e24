"""YAML configuration for redirect generation.

A config file may set any of ``json``, ``prefix``, ``out_dir``, ``flavor``
and ``aliases``. CLI flags take precedence; aliases from both sources are
concatenated (config first).

Example:

    json: releases.json
    prefix: /dl
    out_dir: site
    flavor: compressed
    aliases:
      - target: x86_64-unknown-linux-gnu
        format: tar.gz
        alias: linux
      - mac=universal-apple-darwin.tar.gz
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import yaml

from constants import Constants, RedirectFlavor
from errors import ConfigError
from redirects.models import Alias

logger = logging.getLogger(__name__)

_KNOWN_KEYS = {"json", "prefix", "out_dir", "flavor", "aliases"}


@dataclass
class GenerateConfig:
    """Resolved settings for one ``generate-redirects`` run."""
    json: Optional[str] = None
    prefix: str = Constants.DEFAULT_PREFIX
    out_dir: str = Constants.DEFAULT_OUT_DIR
    flavor: RedirectFlavor = RedirectFlavor.PLAIN
    aliases: List[Alias] = field(default_factory=list)


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """Load a YAML config file; None or an empty file yields an empty mapping.

    Raises:
        ConfigError: If the file is missing, unparsable or not a mapping.
    """
    if not path:
        return {}
    if not os.path.isfile(path):
        raise ConfigError(f"config file not found: {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"failed to parse config file {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"cannot read config file {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping at the top level")
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        logger.warning("Ignoring unknown config keys in %s: %s", path, ", ".join(unknown))
    return data


def parse_alias_entry(entry: Any) -> Alias:
    """Build an Alias from a ``{target, format, alias}`` mapping or an ``ALIAS=TARGET.FORMAT`` string."""
    if isinstance(entry, str):
        try:
            return Alias.parse(entry)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    if isinstance(entry, dict):
        missing = [k for k in ("target", "format", "alias") if not entry.get(k)]
        if missing:
            raise ConfigError(f"alias entry {entry!r} is missing: {', '.join(missing)}")
        try:
            return Alias(
                target=str(entry["target"]),
                format=str(entry["format"]),
                alias=str(entry["alias"]),
            )
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    raise ConfigError(f"invalid alias entry {entry!r}")


def parse_flavor(value: Any) -> RedirectFlavor:
    try:
        return RedirectFlavor.from_name(value)
    except ValueError as exc:
        raise ConfigError(
            f"invalid redirect flavor {value!r}, expected one of: {', '.join(Constants.FLAVORS)}"
        ) from exc


def resolve_generate_config(args: Any) -> GenerateConfig:
    """Merge CLI arguments over the config file over built-in defaults.

    Raises:
        ConfigError: On a malformed file, alias or flavor.
    """
    config_path = getattr(args, "CONFIG", None) or os.environ.get(Constants.ENV_CONFIG)
    data = load_config_file(config_path)

    cfg = GenerateConfig()
    if data.get("json") is not None:
        cfg.json = str(data["json"])
    if data.get("prefix") is not None:
        cfg.prefix = str(data["prefix"])
    if data.get("out_dir") is not None:
        cfg.out_dir = str(data["out_dir"])
    if data.get("flavor") is not None:
        cfg.flavor = parse_flavor(data["flavor"])

    raw_aliases = data.get("aliases") or []
    if not isinstance(raw_aliases, list):
        raise ConfigError("config key 'aliases' must be a list")
    cfg.aliases = [parse_alias_entry(entry) for entry in raw_aliases]

    if getattr(args, "JSON", None):
        cfg.json = args.JSON
    if getattr(args, "PREFIX", None) is not None:
        cfg.prefix = args.PREFIX
    if getattr(args, "OUT_DIR", None):
        cfg.out_dir = args.OUT_DIR
    if getattr(args, "FLAVOR", None):
        cfg.flavor = parse_flavor(args.FLAVOR)
    cfg.aliases.extend(parse_alias_entry(text) for text in (getattr(args, "ALIASES", None) or []))

    if not cfg.json:
        raise ConfigError("no release metadata given (use --json or set 'json' in the config file)")
    return cfg
