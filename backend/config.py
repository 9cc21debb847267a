# Role: Central configuration module. Loads .env into environment variables and computes runtime flags (DEBUG).
# Importers read backend.config.DEBUG to control logging verbosity, and get_settings() for provider/history knobs.

from __future__ import annotations

import os
from functools import lru_cache
from typing import Optional

from dotenv import load_dotenv

from backend.core.errors import ConfigurationError

DEBUG: bool = False

_TRUTHY = {"1", "true", "yes"}


def load_env() -> None:
    """
    Load .env into os.environ, then recompute DEBUG.
    This makes DEBUG correct even if load_env() is called after import.
    """
    global DEBUG
    load_dotenv()
    # Key line: accept common truthy values.
    DEBUG = os.getenv("DEBUG", "0").lower() in _TRUTHY
    get_settings.cache_clear()


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in _TRUTHY


class Settings:
    """Provider and conversation settings derived from environment variables."""

    def __init__(self) -> None:
        self.gemini_api_key: Optional[str] = os.getenv("GEMINI_API_KEY")
        self.gemini_model: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        self.history_window: int = int(os.getenv("HISTORY_WINDOW", "50"))
        # Key line: by default a fallback answer still counts as a turn in the transcript.
        self.keep_fallback_turns: bool = _env_flag("KEEP_FALLBACK_TURNS", True)
        self.store_responses: bool = _env_flag("STORE_RESPONSES", True)
        self.search_tool: str = os.getenv("SEARCH_TOOL", "google_search")

    def require_api_key(self) -> str:
        """Return the configured Gemini API key, raising if it is missing."""
        if not self.gemini_api_key:
            raise ConfigurationError(
                "API key not configured. Please set GEMINI_API_KEY in .env"
            )
        return self.gemini_api_key


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
