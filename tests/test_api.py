"""Tests for the HTTP layer via FastAPI's TestClient."""

import pytest
from fastapi.testclient import TestClient

from conftest import FakeClient, text_response

from backend.api.deps import get_flow_controller
from backend.core.flow_controller import FlowController
from backend.main import app


@pytest.fixture
def client_for():
    def _make(flow):
        app.dependency_overrides[get_flow_controller] = lambda: flow
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


def test_chat_first_turn(client_for, settings):
    fake = FakeClient([text_response("Hi there!", "resp_1")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post(
        "/api/chat",
        json={
            "message": "Hello",
            "conversation_history": [],
            "conversation_id": None,
            "user_datetime": {
                "localDateTime": "Sunday, October 18, 2026",
                "timezone": "Europe/Paris",
                "timestamp": "2026-10-18T10:00:00.000Z",
                "unixTimestamp": 1792318800,
            },
        },
    )

    assert resp.status_code == 200
    assert resp.json() == {
        "response": "Hi there!",
        "response_id": "resp_1",
        "conversation_id": "resp_1",
        "conversation_history": [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there!"},
        ],
    }
    assert "Europe/Paris" in fake.requests[0].system_instruction


@pytest.mark.parametrize("body", [{"message": ""}, {}])
def test_chat_requires_message(client_for, settings, body):
    fake = FakeClient([])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post("/api/chat", json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}
    assert fake.requests == []


def test_chat_missing_key(client_for, no_key_settings):
    http = client_for(FlowController(settings=no_key_settings))

    resp = http.post("/api/chat", json={"message": "Hello"})

    assert resp.status_code == 500
    assert "GEMINI_API_KEY" in resp.json()["error"]


def test_chat_provider_failure(client_for, settings):
    fake = FakeClient([RuntimeError("upstream timeout")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post("/api/chat", json={"message": "Hello"})

    assert resp.status_code == 500
    assert resp.json() == {"error": "Sorry, an error occurred: upstream timeout"}


def test_chat_tolerates_malformed_history(client_for, settings):
    fake = FakeClient([text_response("ok", "r")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post(
        "/api/chat",
        json={
            "message": "q",
            "conversation_id": "conv_1",
            "conversation_history": [None, 5, {"role": "user", "content": None}, {"role": "user", "content": "x"}],
        },
    )

    assert resp.status_code == 200
    data = resp.json()
    assert data["conversation_id"] == "conv_1"
    assert [m["content"] for m in data["conversation_history"]] == ["x", "q", "ok"]


def test_health_and_root():
    http = TestClient(app)
    assert http.get("/health").json()["status"] == "ok"
    assert http.get("/").json()["chat"] == "/api/chat"


def test_chat_non_list_history_is_ignored(client_for, settings):
    fake = FakeClient([text_response("ok", "r")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post(
        "/api/chat",
        json={"message": "q", "conversation_history": {"role": "user", "content": "x"}},
    )

    assert resp.status_code == 200
    assert resp.json()["conversation_history"] == [
        {"role": "user", "content": "q"},
        {"role": "assistant", "content": "ok"},
    ]


def test_chat_partial_user_datetime_is_used(client_for, settings):
    fake = FakeClient([text_response("ok", "r")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post("/api/chat", json={"message": "q", "user_datetime": {"timezone": "UTC"}})

    assert resp.status_code == 200
    system = fake.requests[0].system_instruction
    assert "Timezone: UTC" in system
    assert "Local date/time: unknown" in system


def test_chat_unusable_user_datetime_is_dropped(client_for, settings):
    fake = FakeClient([text_response("ok", "r")])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post("/api/chat", json={"message": "q", "user_datetime": "tonight"})

    assert resp.status_code == 200
    assert "Timezone:" not in fake.requests[0].system_instruction


def test_chat_non_text_message_is_400(client_for, settings):
    fake = FakeClient([])
    http = client_for(FlowController(client=fake, settings=settings))

    resp = http.post("/api/chat", json={"message": 123})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Message is required"}
    assert fake.requests == []
