"""
Suggestion Models - AI suggestions and chat-completion request schemas
"""
from datetime import datetime
from typing import List
from pydantic import BaseModel, ConfigDict, Field


class Suggestion(BaseModel):
    """A finished AI suggestion, built only from a fully drained stream"""
    model_config = ConfigDict(frozen=True)

    suggestion: str = Field(..., description="Generated suggestion text")
    created_at: datetime = Field(..., description="When the stream finished")


class ChatMessage(BaseModel):
    """Single message in a chat-completion request"""
    role: str = Field(..., description="Message role: 'user', 'assistant', or 'system'")
    content: str = Field(..., description="Message content")


class SuggestionRequest(BaseModel):
    """Body of the chat-completion call used for suggestions"""
    messages: List[ChatMessage] = Field(..., min_length=1, description="Conversation to complete")
    stream: bool = Field(default=False, description="Relay the completion as data: lines")
