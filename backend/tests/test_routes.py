"""
Tests for the development habit API and the chat-completion relay
"""
import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from main import app
from habit_tracker.core.dependencies import get_openai_client
from habit_tracker.services.streaming import handle_stream_response
from habit_tracker.services.suggestions import relay
from conftest import make_stream_response


class FakeChunk:
    def __init__(self, content):
        self.payload = {
            "id": "chatcmpl-test",
            "object": "chat.completion.chunk",
            "choices": [{"index": 0, "delta": {"content": content}}]
        }

    def model_dump_json(self, **kwargs):
        return json.dumps(self.payload)


class FakeCompletion:
    def __init__(self, message):
        self.payload = {"object": "chat.completion", "choices": [{"index": 0, "message": message}]}

    def model_dump_json(self, **kwargs):
        return json.dumps(self.payload)


class FakeCompletions:
    def __init__(self, contents=(), error=None):
        self.contents = list(contents)
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        if kwargs.get("stream"):
            return iter([FakeChunk(c) for c in self.contents])
        message = {"role": "assistant", "content": "".join(self.contents)}
        return FakeCompletion(message)


def fake_openai(contents=(), error=None):
    return SimpleNamespace(chat=SimpleNamespace(completions=FakeCompletions(contents, error)))


@pytest.fixture
def client(clean_repository):
    yield TestClient(app)
    app.dependency_overrides.clear()


def use_openai(fake):
    app.dependency_overrides[get_openai_client] = lambda: fake
    return fake


# ============================================================================
# HABITS
# ============================================================================

def test_create_list_and_log_habit(client):
    created = client.post("/api/create-habit", json={"name": " Read ", "frequency": "weekly"})
    assert created.status_code == 200
    habit = created.json()["habit"]
    assert habit["name"] == "Read"
    assert habit["frequency"] == "weekly"

    listed = client.post("/api/list-habits").json()
    assert [h["id"] for h in listed["habits"]] == [habit["id"]]

    logged = client.post("/api/log-habit", json={"habitId": habit["id"]})
    assert logged.status_code == 200
    assert logged.json()["completion_count"] == 1

    again = client.post("/api/log-habit", json={"habitId": str(habit["id"])})
    assert again.json()["completion_count"] == 2


def test_create_habit_defaults_to_daily(client):
    habit = client.post("/api/create-habit", json={"name": "Walk"}).json()["habit"]
    assert habit["frequency"] == "daily"


@pytest.mark.parametrize("body", [
    {"name": "   ", "frequency": "daily"},
    {"name": "Walk", "frequency": "hourly"},
    {"frequency": "daily"},
])
def test_create_habit_rejects_invalid_body(client, body):
    assert client.post("/api/create-habit", json=body).status_code == 422


def test_log_unknown_habit_is_404(client):
    assert client.post("/api/log-habit", json={"habitId": 12345}).status_code == 404
    assert client.post("/api/log-habit", json={"habitId": "not-an-id"}).status_code == 404


def test_health_reports_habit_count(client):
    client.post("/api/create-habit", json={"name": "Walk"})
    body = client.get("/health").json()
    assert body["status"] == "ok"
    assert body["habits"] == 1


# ============================================================================
# CHAT-COMPLETION RELAY
# ============================================================================

SUGGESTION_BODY = {
    "messages": [{"role": "user", "content": "Suggest a habit"}],
    "stream": True
}


def test_stream_relays_data_lines_and_done(client):
    fake = use_openai(fake_openai(["Drink ", "water"]))

    response = client.post("/integrations/chat-gpt/conversationgpt4", json=SUGGESTION_BODY)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/event-stream")
    lines = [line for line in response.text.split("\n") if line]
    assert lines[-1] == "data: [DONE]"
    assert len(lines) == 3
    assert fake.chat.completions.calls[0]["stream"] is True
    assert fake.chat.completions.calls[0]["messages"] == SUGGESTION_BODY["messages"]


def test_relayed_stream_aggregates_on_the_client(client):
    use_openai(fake_openai(["Stretch ", "for ", "five minutes ☀"]))
    body = client.post("/integrations/chat-gpt/conversationgpt4", json=SUGGESTION_BODY).content

    segments = [body[i:i + 7] for i in range(0, len(body), 7)]
    finished = []
    handle_stream_response(make_stream_response(segments), lambda text: None, finished.append)

    assert finished == ["Stretch for five minutes ☀"]


def test_non_streaming_completion_returns_json(client):
    use_openai(fake_openai(["Sleep early"]))

    response = client.post(
        "/integrations/chat-gpt/conversationgpt4",
        json={"messages": SUGGESTION_BODY["messages"], "stream": False}
    )

    assert response.status_code == 200
    assert response.json()["choices"][0]["message"]["content"] == "Sleep early"


def test_upstream_failure_before_streaming_is_502(client):
    use_openai(fake_openai(error=RuntimeError("quota exceeded")))

    response = client.post("/integrations/chat-gpt/conversationgpt4", json=SUGGESTION_BODY)

    assert response.status_code == 502


def test_empty_messages_rejected(client):
    use_openai(fake_openai())
    response = client.post("/integrations/chat-gpt/conversationgpt4", json={"messages": [], "stream": True})
    assert response.status_code == 422


def test_relay_propagates_midstream_failure_without_done():
    def broken():
        yield FakeChunk("partial")
        raise RuntimeError("upstream dropped")

    lines = relay.relay_completion_stream(broken())

    assert next(lines).startswith("data: {")
    with pytest.raises(RuntimeError):
        next(lines)
