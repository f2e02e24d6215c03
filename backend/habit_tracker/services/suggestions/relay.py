"""
Chat-completion relay - server side of the suggestion stream
Converts OpenAI streaming chunks into data: lines
"""
from typing import Any, Dict, Iterable, Iterator, List
import json
import logging

from openai import OpenAI

from habit_tracker.core.constants import SSE_DATA_PREFIX, SSE_DONE_PAYLOAD
from habit_tracker.core.exceptions import ExternalServiceError

logger = logging.getLogger(__name__)


def format_data_line(payload: str) -> str:
    """Frame one payload as a data: line followed by a blank line"""
    return f"{SSE_DATA_PREFIX} {payload}\n\n"


def open_completion_stream(client: OpenAI, messages: List[Dict[str, Any]], model: str) -> Iterable[Any]:
    """
    Start a streaming chat completion

    Raises:
        ExternalServiceError: If OpenAI rejects the call before streaming starts
    """
    try:
        return client.chat.completions.create(model=model, messages=messages, stream=True)
    except Exception as e:
        logger.error(f"[RELAY] Could not start completion: {e}")
        raise ExternalServiceError(f"Failed to start chat completion: {e}")


def relay_completion_stream(stream: Iterable[Any]) -> Iterator[str]:
    """
    Yield each chunk as a data: line, then the [DONE] marker

    Errors after the first chunk propagate so the connection is aborted
    instead of being closed cleanly.
    """
    chunk_count = 0
    try:
        for chunk in stream:
            chunk_count += 1
            yield format_data_line(chunk.model_dump_json(exclude_none=True))
    except Exception as e:
        logger.error(f"[RELAY] Upstream stream failed after {chunk_count} chunk(s): {e}")
        raise

    logger.info(f"[RELAY] Relayed {chunk_count} chunk(s)")
    yield format_data_line(SSE_DONE_PAYLOAD)


def complete_once(client: OpenAI, messages: List[Dict[str, Any]], model: str) -> Dict[str, Any]:
    """
    Run a non-streaming chat completion

    Raises:
        ExternalServiceError: If the OpenAI call fails
    """
    try:
        completion = client.chat.completions.create(model=model, messages=messages)
    except Exception as e:
        logger.error(f"[RELAY] Completion failed: {e}")
        raise ExternalServiceError(f"Chat completion failed: {e}")
    return json.loads(completion.model_dump_json(exclude_none=True))
