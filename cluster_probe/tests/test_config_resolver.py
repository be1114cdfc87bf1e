"""Tests for alias-based target resolution.

Covers:
- alias file lookup (JSON and YAML)
- MC_HOST_<alias> URLs, including session tokens and percent-encoding
- environment entries overriding the alias file
- configuration errors for raw URLs, unknown aliases and bad env URLs
"""
from __future__ import annotations

import json

import pytest

from cluster_probe.base.errors import ErrorCode, ProbeError
from cluster_probe.config import reset_config_cache, resolve_target, split_alias
from cluster_probe.config.env import parse_host_env_url


def _write_aliases(monkeypatch, tmp_path, text, name="config.json"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    monkeypatch.setenv("CLUSTER_PROBE_CONFIG_FILE", str(path))
    reset_config_cache()


def test_alias_from_json_file(monkeypatch, tmp_path):
    aliases = {
        "aliases": {
            "myminio": {"url": "https://play.example.net/", "accessKey": "AK", "secretKey": "SK"}
        }
    }
    _write_aliases(monkeypatch, tmp_path, json.dumps(aliases))

    cfg = resolve_target("myminio/bucket/prefix", insecure=True)

    assert cfg.alias == "myminio"
    assert cfg.host_url == "https://play.example.net"
    assert (cfg.access_key, cfg.secret_key, cfg.session_token) == ("AK", "SK", None)
    assert cfg.insecure is True and cfg.debug is False


def test_alias_from_yaml_file(monkeypatch, tmp_path):
    text = "aliases:\n  local:\n    url: http://localhost:9000\n    accessKey: a\n    secretKey: b\n"
    _write_aliases(monkeypatch, tmp_path, text, name="config.yaml")

    cfg = resolve_target("local")
    assert cfg.host_url == "http://localhost:9000"
    assert cfg.access_key == "a"


def test_alias_from_environment_with_session_token(monkeypatch):
    monkeypatch.setenv("MC_HOST_envalias", "https://AK:S%2FK:TOKEN@node.example.net:9443")

    cfg = resolve_target("envalias", debug=True)

    assert cfg.host_url == "https://node.example.net:9443"
    assert cfg.access_key == "AK"
    assert cfg.secret_key == "S/K"
    assert cfg.session_token == "TOKEN"
    assert cfg.debug is True


def test_environment_overrides_file(monkeypatch, tmp_path):
    aliases = {"aliases": {"dup": {"url": "http://file:9000", "accessKey": "F", "secretKey": "F"}}}
    _write_aliases(monkeypatch, tmp_path, json.dumps(aliases))
    monkeypatch.setenv("MC_HOST_dup", "http://E:E@env:9000")

    cfg = resolve_target("dup")
    assert cfg.host_url == "http://env:9000"
    assert cfg.access_key == "E"


def test_raw_url_requires_alias():
    with pytest.raises(ProbeError) as exc:
        resolve_target("http://localhost:9000")
    assert exc.value.code is ErrorCode.CONFIGURATION
    assert "use an alias" in exc.value.message


def test_unknown_alias_is_named():
    with pytest.raises(ProbeError) as exc:
        resolve_target("nosuch/bucket")
    assert exc.value.code is ErrorCode.CONFIGURATION
    assert exc.value.target == "nosuch"
    assert "nosuch" in exc.value.message


def test_empty_target_is_rejected():
    with pytest.raises(ProbeError):
        resolve_target("  ")


def test_unreadable_alias_file_behaves_as_empty(monkeypatch, tmp_path):
    _write_aliases(monkeypatch, tmp_path, "aliases: [unbalanced")
    with pytest.raises(ProbeError) as exc:
        resolve_target("local")
    assert "no such alias" in exc.value.message


@pytest.mark.parametrize("value", ["ftp://a:b@host", "not a url", "http://a:b@"])
def test_malformed_env_url(value):
    with pytest.raises(ProbeError) as exc:
        parse_host_env_url("bad", value)
    assert exc.value.code is ErrorCode.CONFIGURATION
    assert "MC_HOST_bad" in exc.value.message


def test_split_alias():
    assert split_alias("alias/bucket/key") == ("alias", "bucket/key")
    assert split_alias("alias") == ("alias", "")
