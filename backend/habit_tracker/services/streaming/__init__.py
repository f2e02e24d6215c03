"""
Streaming module - chat-completion stream decoding and aggregation
"""
from .aggregator import iter_stream_events, handle_stream_response, StreamEvent
from .decoder import DONE, SSELineDecoder, parse_data_line, extract_delta

__all__ = [
    'iter_stream_events',
    'handle_stream_response',
    'StreamEvent',
    'DONE',
    'SSELineDecoder',
    'parse_data_line',
    'extract_delta'
]
