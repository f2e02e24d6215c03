"""
Suggestions module - AI suggestion streams (client) and OpenAI relay (server)
"""
from . import relay
from .service import SuggestionService, StreamHandle

__all__ = [
    'relay',
    'SuggestionService',
    'StreamHandle'
]
