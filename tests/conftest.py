"""Shared fixtures: environment-backed settings and a scripted provider client."""

from typing import List, Optional

import pytest

from backend.config import Settings
from backend.models.provider import (
    FlattenedOutput,
    OutputItem,
    ProviderRequest,
    ProviderResponse,
    StructuredOutput,
)


class FakeClient:
    """Stands in for GeminiClient: records requests and replays scripted responses."""

    def __init__(self, responses: Optional[List[object]] = None) -> None:
        self.responses = list(responses or [])
        self.requests: List[ProviderRequest] = []

    def create_response(self, request: ProviderRequest) -> ProviderResponse:
        self.requests.append(request)
        nxt = self.responses.pop(0)
        if isinstance(nxt, Exception):
            raise nxt
        return nxt


def text_response(text: Optional[str], response_id: str = "resp_1") -> ProviderResponse:
    return ProviderResponse(response_id=response_id, output=FlattenedOutput(text=text))


def structured_response(contents: list, response_id: str = "resp_1") -> ProviderResponse:
    items = [OutputItem(type="text", content=c) for c in contents]
    return ProviderResponse(response_id=response_id, output=StructuredOutput(items=items))


@pytest.fixture
def settings(monkeypatch) -> Settings:
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    monkeypatch.setenv("GEMINI_MODEL", "gemini-test")
    monkeypatch.delenv("HISTORY_WINDOW", raising=False)
    monkeypatch.delenv("KEEP_FALLBACK_TURNS", raising=False)
    monkeypatch.delenv("STORE_RESPONSES", raising=False)
    monkeypatch.delenv("SEARCH_TOOL", raising=False)
    return Settings()


@pytest.fixture
def no_key_settings(monkeypatch) -> Settings:
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    return Settings()
