"""Tests for environment configuration and logging setup."""

import logging

from pathmorph.bootstrap import configure_logging
from pathmorph.config import Settings


def test_defaults():
    s = Settings()
    assert s.default_morpher == "curve"
    assert s.close_tolerance == 0.5
    assert s.cache_max_entries == 0


def test_env_prefix(monkeypatch):
    monkeypatch.setenv("PATHMORPH_DEFAULT_MORPHER", "ring")
    monkeypatch.setenv("PATHMORPH_POLYGON_PRECISION", "2.5")
    s = Settings()
    assert s.default_morpher == "ring"
    assert s.polygon_precision == 2.5


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    configure_logging(Settings(log_level="debug"))
    assert calls["level"] == logging.DEBUG
    assert "%(name)s" in calls["format"]
