"""Tests for environment-backed settings."""

import pytest

import backend.config as config
from backend.config import Settings, get_settings
from backend.core.errors import ConfigurationError


def test_defaults(monkeypatch):
    for name in ("GEMINI_MODEL", "HISTORY_WINDOW", "KEEP_FALLBACK_TURNS", "STORE_RESPONSES", "SEARCH_TOOL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings()
    assert s.gemini_model == "gemini-2.5-flash"
    assert s.history_window == 50
    assert s.keep_fallback_turns is True
    assert s.store_responses is True
    assert s.search_tool == "google_search"


def test_overrides(monkeypatch):
    monkeypatch.setenv("HISTORY_WINDOW", "10")
    monkeypatch.setenv("KEEP_FALLBACK_TURNS", "no")
    monkeypatch.setenv("STORE_RESPONSES", "0")
    s = Settings()
    assert s.history_window == 10
    assert s.keep_fallback_turns is False
    assert s.store_responses is False


def test_require_api_key(monkeypatch):
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    with pytest.raises(ConfigurationError, match="GEMINI_API_KEY"):
        Settings().require_api_key()

    monkeypatch.setenv("GEMINI_API_KEY", "abc")
    assert Settings().require_api_key() == "abc"


def test_load_env_recomputes_debug_and_settings(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    monkeypatch.setenv("DEBUG", "true")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-first")
    config.load_env()
    assert config.DEBUG is True
    assert get_settings().gemini_model == "gemini-first"

    monkeypatch.setenv("DEBUG", "0")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-second")
    config.load_env()
    assert config.DEBUG is False
    assert get_settings().gemini_model == "gemini-second"
    get_settings.cache_clear()
