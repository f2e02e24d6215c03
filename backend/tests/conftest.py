"""
Shared fixtures: real requests.Response objects over scripted bodies
"""
import json
from typing import Any, Iterable, List, Optional, Union
from unittest import mock

import pytest
import requests

from habit_tracker.services.habits import repository


class ScriptedRaw:
    """Raw body that hands out fixed segments, then optionally fails"""

    def __init__(self, segments: Iterable[Union[str, bytes]], error: Optional[Exception] = None):
        self.segments = [s.encode("utf-8") if isinstance(s, str) else s for s in segments]
        self.error = error
        self.reads = 0
        self.closed = False
        self.released = False

    def stream(self, amt=None, decode_content=None):
        for segment in self.segments:
            self.reads += 1
            yield segment
        if self.error is not None:
            raise self.error

    def close(self):
        self.closed = True

    def release_conn(self):
        self.released = True


def make_stream_response(segments: Iterable[Union[str, bytes]], status: int = 200,
                         error: Optional[Exception] = None) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = "http://test/integrations/chat-gpt/conversationgpt4"
    response.raw = ScriptedRaw(segments, error)
    return response


def make_json_response(payload: Any, status: int = 200) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.url = "http://test/api"
    response.headers["Content-Type"] = "application/json"
    response.encoding = "utf-8"
    response._content = json.dumps(payload).encode("utf-8")
    return response


def delta_line(content: Optional[str]) -> str:
    """A chat-completion data line carrying one delta"""
    delta = {} if content is None else {"content": content}
    chunk = {"object": "chat.completion.chunk", "choices": [{"index": 0, "delta": delta}]}
    return "data: " + json.dumps(chunk, ensure_ascii=False)


def habit_payload(habit_id: int, name: str, frequency: str = "daily") -> dict:
    return {"id": habit_id, "name": name, "frequency": frequency}


@pytest.fixture
def session():
    """requests.Session stand-in; queue responses on session.post.side_effect"""
    return mock.create_autospec(requests.Session, instance=True)


@pytest.fixture
def clean_repository():
    repository.clear()
    yield repository
    repository.clear()


def post_urls(session) -> List[str]:
    return [c.args[0] for c in session.post.call_args_list]
