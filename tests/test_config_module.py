"""Tests for :mod:`netgraphml.config`."""

from __future__ import annotations

from pathlib import Path

import pytest

from netgraphml import config


PROJECT_ROOT = Path(config.__file__).resolve().parents[1]


@pytest.mark.skipif(not (PROJECT_ROOT / ".env").exists(), reason="project .env not present")
def test_get_env_reads_from_project_dotenv(monkeypatch):
    """The helper should pull values from the real project ``.env`` file."""

    config._load_environment.cache_clear()
    monkeypatch.delenv("NETGRAPHML_INDENT", raising=False)

    assert config.get_env("NETGRAPHML_INDENT") == "2"


def test_get_env_prefers_process_environment(monkeypatch):
    """Explicit environment variables should win over the file contents."""

    config._load_environment.cache_clear()
    monkeypatch.setenv("NETGRAPHML_INDENT", "4")

    assert config.get_env("NETGRAPHML_INDENT") == "4"


def test_get_env_returns_default_when_missing(monkeypatch):
    config._load_environment.cache_clear()
    monkeypatch.delenv("NETGRAPHML_DOES_NOT_EXIST", raising=False)

    assert config.get_env("NETGRAPHML_DOES_NOT_EXIST", default="fallback") == "fallback"


def test_get_indent_uses_configured_width(monkeypatch):
    monkeypatch.setenv("NETGRAPHML_INDENT", "4")
    assert config.get_indent() == "    "

    monkeypatch.setenv("NETGRAPHML_INDENT", "0")
    assert config.get_indent() == ""


@pytest.mark.parametrize("raw", ["two", "-1", ""])
def test_get_indent_rejects_invalid_values(monkeypatch, raw):
    monkeypatch.setenv("NETGRAPHML_INDENT", raw)
    with pytest.raises(ValueError):
        config.get_indent()
