"""
Suggestion Service - opens AI suggestion streams, one at a time
"""
from typing import Any, Dict, Iterator, List, Optional
import logging
import threading

import requests

from habit_tracker.core.constants import SUGGESTIONS_PATH_DEFAULT
from habit_tracker.core.dependencies import get_http_session
from habit_tracker.core.exceptions import RequestError, StreamAlreadyActiveError
from habit_tracker.models.suggestion import ChatMessage, SuggestionRequest
from habit_tracker.services.streaming import StreamEvent, iter_stream_events
from habit_tracker.utils.prompts import SUGGESTION_SYSTEM_PROMPT, format_suggestion_prompt

logger = logging.getLogger(__name__)


class StreamHandle:
    """
    Token for one in-flight suggestion stream.

    events() can be iterated once. The owning service accepts a new stream
    only after this one has finished, failed or been closed.
    """

    def __init__(self, service: "SuggestionService", response: requests.Response,
                 cancel_event: threading.Event):
        self._service = service
        self._response = response
        self._cancel_event = cancel_event
        self._started = False

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def cancel(self) -> None:
        """Ask the stream to stop before its next read"""
        self._cancel_event.set()

    def events(self) -> Iterator[StreamEvent]:
        """Yield the cumulative-text events of this stream"""
        if self._started:
            raise RuntimeError("A suggestion stream can only be consumed once")
        self._started = True
        try:
            yield from iter_stream_events(self._response, cancel_event=self._cancel_event)
        finally:
            self._service._release(self)

    def close(self) -> None:
        """Drop the stream without reading it"""
        self._response.close()
        self._service._release(self)


class SuggestionService:
    """Starts chat-completion streams for habit suggestions"""

    def __init__(
        self,
        base_url: str,
        session: Optional[requests.Session] = None,
        path: str = SUGGESTIONS_PATH_DEFAULT,
        timeout: Optional[float] = None
    ):
        self.url = f"{base_url.rstrip('/')}{path}"
        self.session = session or get_http_session()
        self.timeout = timeout
        self._active: Optional[StreamHandle] = None

    @property
    def is_streaming(self) -> bool:
        return self._active is not None

    def build_request(self, habit_names: List[str]) -> Dict[str, Any]:
        """
        Build the chat-completion body asking for one new habit

        Args:
            habit_names: Names of the user's current habits

        Returns:
            JSON-ready request body with stream enabled
        """
        request = SuggestionRequest(
            messages=[
                ChatMessage(role="system", content=SUGGESTION_SYSTEM_PROMPT),
                ChatMessage(role="user", content=format_suggestion_prompt(habit_names))
            ],
            stream=True
        )
        return request.model_dump()

    def start(self, habit_names: List[str],
              cancel_event: Optional[threading.Event] = None) -> StreamHandle:
        """
        Open a suggestion stream

        Args:
            habit_names: Names of the user's current habits
            cancel_event: Optional event the caller can set to stop the stream

        Returns:
            Handle for the new stream

        Raises:
            StreamAlreadyActiveError: If another stream is still in flight
            RequestError: If the request cannot be sent
        """
        if self._active is not None:
            raise StreamAlreadyActiveError("A suggestion stream is already in progress")

        logger.info(f"[STREAM] Requesting suggestion for {len(habit_names)} habit(s)")
        try:
            response = self.session.post(
                self.url,
                json=self.build_request(habit_names),
                stream=True,
                timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.error(f"[STREAM] Could not open suggestion stream: {e}")
            raise RequestError(f"Could not open suggestion stream: {e}")

        handle = StreamHandle(self, response, cancel_event or threading.Event())
        self._active = handle
        return handle

    def _release(self, handle: StreamHandle) -> None:
        if self._active is handle:
            self._active = None
