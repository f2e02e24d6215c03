"""
Chat-completion stream decoding
Turns raw response segments into text lines and lines into JSON chunks
"""
import codecs
import json
import logging
from typing import Any, Dict, List, Optional, Union

from habit_tracker.core.constants import SSE_DATA_PREFIX, SSE_DONE_PAYLOAD

logger = logging.getLogger(__name__)

# Sentinel returned by parse_data_line for the logical end-of-stream marker
DONE = object()


def _data_payload(line: str) -> Optional[str]:
    """Return the payload after the data: prefix, or None if the line has no prefix"""
    if not line.startswith(SSE_DATA_PREFIX):
        return None
    payload = line[len(SSE_DATA_PREFIX):]
    if payload.startswith(" "):
        payload = payload[1:]
    return payload.strip()


def parse_data_line(line: str) -> Union[Dict[str, Any], object, None]:
    """
    Parse one line of the stream

    Args:
        line: A single decoded line without its newline

    Returns:
        DONE for the [DONE] marker, the decoded JSON object for a data line,
        or None for keep-alive, comment, non-data and malformed lines
    """
    payload = _data_payload(line.strip())
    if payload is None:
        return None
    if payload == SSE_DONE_PAYLOAD:
        return DONE

    try:
        chunk = json.loads(payload)
    except ValueError:
        logger.debug(f"[STREAM] Skipping malformed data line: {payload[:80]}")
        return None

    if not isinstance(chunk, dict):
        return None
    return chunk


def extract_delta(chunk: Dict[str, Any]) -> Optional[str]:
    """
    Pull the incremental text out of a chat-completion chunk

    Absence at any level of choices[0].delta.content means "no text".
    """
    choices = chunk.get("choices")
    if not isinstance(choices, list) or not choices:
        return None
    first = choices[0]
    if not isinstance(first, dict):
        return None
    delta = first.get("delta")
    if not isinstance(delta, dict):
        return None
    content = delta.get("content")
    return content if isinstance(content, str) else None


def _is_complete_line(fragment: str) -> bool:
    """True if a fragment with no trailing newline is already a whole data line"""
    payload = _data_payload(fragment.strip())
    if payload is None:
        return False
    if payload == SSE_DONE_PAYLOAD:
        return True
    try:
        json.loads(payload)
    except ValueError:
        return False
    return True


class SSELineDecoder:
    """
    Incremental decoder from raw byte segments to text lines.

    UTF-8 sequences split across segments are held in the codec until they
    complete. A trailing fragment with no newline is held back unless it is
    already a whole data line. Until the first newline arrives the sender is
    taken to frame lines by segment, so a held fragment is emitted on its own
    when the next segment starts a new data line, unless joining the two makes
    a whole data line. Once a newline has been seen, lines are split on
    newlines only.
    """

    def __init__(self, encoding: str = "utf-8"):
        self._decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self._pending = ""
        self._seen_newline = False

    def feed(self, segment: bytes) -> List[str]:
        """Decode one segment and return the lines it completes"""
        text = self._decoder.decode(segment)
        if not text:
            return []

        lines = []
        if self._pending and not self._seen_newline and text.startswith(SSE_DATA_PREFIX):
            head = text.split("\n", 1)[0]
            if not _is_complete_line(self._pending + head):
                lines.append(self._pending)
                self._pending = ""

        if "\n" in text:
            self._seen_newline = True
        parts = (self._pending + text).split("\n")
        self._pending = parts.pop()
        lines.extend(part.rstrip("\r") for part in parts)

        if self._pending and _is_complete_line(self._pending):
            lines.append(self._pending.rstrip("\r"))
            self._pending = ""
        return lines

    def flush(self) -> List[str]:
        """Return whatever is left once the transport has closed"""
        tail = self._pending + self._decoder.decode(b"", final=True)
        self._pending = ""
        if not tail:
            return []
        return [part.rstrip("\r") for part in tail.split("\n")]
