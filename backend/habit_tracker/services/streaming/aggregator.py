"""
Stream Aggregator - assembles a streamed chat completion into one message
"""
import logging
import threading
from contextlib import closing
from typing import Callable, Iterator, Optional, Union

import requests

from habit_tracker.core.exceptions import (
    StreamUnavailable,
    StreamReadError,
    StreamCancelledError
)
from habit_tracker.models.events import StreamChunk, StreamFinished
from .decoder import DONE, SSELineDecoder, extract_delta, parse_data_line

logger = logging.getLogger(__name__)

StreamEvent = Union[StreamChunk, StreamFinished]


def _close(response: requests.Response) -> None:
    """Close the response, tolerating a body that was never attached"""
    if response.raw is None:
        response._content_consumed = True
    response.close()


def _check_readable(response: requests.Response) -> None:
    """
    Make sure the response can be streamed

    Raises:
        StreamUnavailable: If the status is not a success or there is no body stream
    """
    if not response.ok:
        _close(response)
        raise StreamUnavailable(f"Suggestion stream returned HTTP {response.status_code}")
    if response.raw is None:
        _close(response)
        raise StreamUnavailable("Suggestion response has no readable body")


def iter_stream_events(
    response: requests.Response,
    cancel_event: Optional[threading.Event] = None
) -> Iterator[StreamEvent]:
    """
    Consume a streamed chat-completion response

    Yields a StreamChunk carrying the cumulative text each time a non-empty
    delta arrives, then exactly one StreamFinished on [DONE] or transport
    end-of-stream, whichever comes first. The response is closed when the
    generator ends, however it ends.

    Args:
        response: Response opened with stream=True
        cancel_event: Optional event; when set, reading stops before the next segment

    Raises:
        StreamUnavailable: If the response cannot be streamed
        StreamReadError: If reading fails before completion (partial text is dropped)
        StreamCancelledError: If cancel_event was set before completion
    """
    _check_readable(response)

    decoder = SSELineDecoder()
    text = ""
    chunk_count = 0

    try:
        segments = response.iter_content(chunk_size=None)
        done = False

        while not done:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"[STREAM] Cancelled after {chunk_count} chunk(s)")
                raise StreamCancelledError("Suggestion stream was cancelled")

            try:
                segment = next(segments, None)
            except (requests.RequestException, OSError) as e:
                logger.error(f"[STREAM] Read failed after {chunk_count} chunk(s): {e}")
                raise StreamReadError(f"Failed to read suggestion stream: {e}") from e

            at_eof = segment is None
            lines = decoder.flush() if at_eof else decoder.feed(segment)

            for line in lines:
                payload = parse_data_line(line)
                if payload is DONE:
                    done = True
                    break
                if payload is None:
                    continue
                delta = extract_delta(payload)
                if delta:
                    text += delta
                    chunk_count += 1
                    yield StreamChunk(text=text)

            if at_eof:
                if not done:
                    logger.debug("[STREAM] Transport closed without [DONE]")
                break

        logger.info(f"[STREAM] Finished: {chunk_count} chunk(s), {len(text)} chars")
        yield StreamFinished(text=text)
    finally:
        response.close()


def handle_stream_response(
    response: requests.Response,
    on_chunk: Callable[[str], None],
    on_finish: Callable[[str], None],
    cancel_event: Optional[threading.Event] = None
) -> str:
    """
    Callback form of iter_stream_events

    Args:
        response: Response opened with stream=True
        on_chunk: Called with the cumulative text after every non-empty delta
        on_finish: Called once with the final text; never called on failure
        cancel_event: Optional cancellation event

    Returns:
        The final text
    """
    final_text = ""
    with closing(iter_stream_events(response, cancel_event=cancel_event)) as events:
        for event in events:
            if isinstance(event, StreamFinished):
                final_text = event.text
                on_finish(final_text)
            else:
                on_chunk(event.text)
    return final_text
