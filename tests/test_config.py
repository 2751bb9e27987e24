"""Tests for configuration loading and CLI precedence."""

import pytest

from args import parse_args
from config import load_config_file, parse_alias_entry, resolve_generate_config
from constants import RedirectFlavor
from errors import ConfigError
from redirects.models import Alias


def _args(*extra):
    return parse_args(["generate-redirects", *extra])


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv("RELROUTE_CONFIG", raising=False)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "relroute.yml"
    path.write_text(
        "json: releases.json\n"
        "prefix: /dl\n"
        "out_dir: site\n"
        "flavor: cloudflare\n"
        "aliases:\n"
        "  - target: linux\n"
        "    format: tar.gz\n"
        "    alias: linux-x64\n"
        "  - mac=darwin.zip\n",
        encoding="utf-8",
    )
    return path


def test_defaults_need_json():
    with pytest.raises(ConfigError, match="no release metadata"):
        resolve_generate_config(_args())


def test_cli_only():
    cfg = resolve_generate_config(_args("--json", "r.json", "--alias", "linux=linux.tar.gz"))
    assert cfg.json == "r.json"
    assert cfg.prefix == ""
    assert cfg.out_dir == "."
    assert cfg.flavor == RedirectFlavor.PLAIN
    assert cfg.aliases == [Alias(target="linux", format="tar.gz", alias="linux")]


def test_config_file_values(config_file):
    cfg = resolve_generate_config(_args("--config", str(config_file)))
    assert cfg.json == "releases.json"
    assert cfg.prefix == "/dl"
    assert cfg.out_dir == "site"
    assert cfg.flavor == RedirectFlavor.COMPRESSED
    assert cfg.aliases == [
        Alias(target="linux", format="tar.gz", alias="linux-x64"),
        Alias(target="darwin", format="zip", alias="mac"),
    ]


def test_cli_overrides_config(config_file):
    cfg = resolve_generate_config(_args(
        "--config", str(config_file),
        "--json", "other.json",
        "--prefix", "",
        "--flavor", "plain",
        "--alias", "win=windows.zip",
    ))
    assert cfg.json == "other.json"
    assert cfg.prefix == ""
    assert cfg.out_dir == "site"
    assert cfg.flavor == RedirectFlavor.PLAIN
    assert [a.alias for a in cfg.aliases] == ["linux-x64", "mac", "win"]


def test_config_from_environment(config_file, monkeypatch):
    monkeypatch.setenv("RELROUTE_CONFIG", str(config_file))
    assert resolve_generate_config(_args()).json == "releases.json"


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config_file(str(tmp_path / "missing.yml"))


def test_empty_config_file(tmp_path):
    path = tmp_path / "empty.yml"
    path.write_text("", encoding="utf-8")
    assert load_config_file(str(path)) == {}


@pytest.mark.parametrize("body", ["- a\n- b\n", "key: [unclosed\n"])
def test_malformed_config_file(tmp_path, body):
    path = tmp_path / "bad.yml"
    path.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config_file(str(path))


def test_invalid_flavor_in_config(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("json: r.json\nflavor: apache\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid redirect flavor"):
        resolve_generate_config(_args("--config", str(path)))


def test_aliases_must_be_a_list(tmp_path):
    path = tmp_path / "bad.yml"
    path.write_text("json: r.json\naliases: linux=linux.tar.gz\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a list"):
        resolve_generate_config(_args("--config", str(path)))


@pytest.mark.parametrize("entry", [{"target": "linux", "format": "tar.gz"}, "linux", 42])
def test_bad_alias_entries(entry):
    with pytest.raises(ConfigError):
        parse_alias_entry(entry)


@pytest.mark.parametrize(
    "entry",
    [{"target": "linux", "format": "tar.gz", "alias": "a/b"}, "a/b=linux.tar.gz"],
)
def test_alias_must_be_single_segment(entry):
    with pytest.raises(ConfigError, match="single path segment"):
        parse_alias_entry(entry)


def test_flavor_platform_names():
    assert RedirectFlavor.from_name("Netlify") == RedirectFlavor.PLAIN
    assert RedirectFlavor.from_name("cloudflare") == RedirectFlavor.COMPRESSED
    assert RedirectFlavor.from_name("compressed") == RedirectFlavor.COMPRESSED
