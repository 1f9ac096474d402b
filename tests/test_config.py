"""
Tests for environment-driven settings.
"""

import pytest
from pydantic import ValidationError

from ampere_search.config import Settings


def test_defaults(monkeypatch):
	for name in ("CONTENT_SOURCE_PATH", "DEFAULT_SEARCH_LIMIT", "MAX_SEARCH_LIMIT", "RATE_LIMIT_WINDOW_MS", "RATE_LIMIT_MAX_REQUESTS", "LOG_LEVEL"):
		monkeypatch.delenv(name, raising=False)
	settings = Settings(_env_file=None)
	assert settings.CONTENT_SOURCE_PATH is None
	assert settings.DEFAULT_SEARCH_LIMIT == 20
	assert settings.MAX_SEARCH_LIMIT == 50
	assert settings.RATE_LIMIT_WINDOW_MS == 60000
	assert settings.RATE_LIMIT_MAX_REQUESTS == 100
	assert settings.LOG_LEVEL == "INFO"


def test_env_overrides(monkeypatch):
	monkeypatch.setenv("RATE_LIMIT_MAX_REQUESTS", "5")
	monkeypatch.setenv("LOG_LEVEL", "debug")
	settings = Settings(_env_file=None)
	assert settings.RATE_LIMIT_MAX_REQUESTS == 5
	assert settings.LOG_LEVEL == "DEBUG"


def test_rejects_non_positive(monkeypatch):
	monkeypatch.setenv("RATE_LIMIT_WINDOW_MS", "0")
	with pytest.raises(ValidationError):
		Settings(_env_file=None)
