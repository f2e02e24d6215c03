"""
Integration Routes - Chat-completion endpoint used for habit suggestions
"""
import logging
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from openai import OpenAI

from habit_tracker.core.config import settings
from habit_tracker.core.dependencies import get_openai_client
from habit_tracker.core.exceptions import ExternalServiceError
from habit_tracker.models.suggestion import SuggestionRequest
from habit_tracker.services.suggestions import relay

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/integrations", tags=["integrations"])


@router.post("/chat-gpt/conversationgpt4")
async def conversation(request: SuggestionRequest, client: OpenAI = Depends(get_openai_client)):
    """
    Run a chat completion

    With stream=true the completion is relayed as `data: {chunk}` lines ending
    in `data: [DONE]`; otherwise the finished completion is returned as JSON.
    """
    messages = [m.model_dump() for m in request.messages]
    logger.info(f"[CHAT] Completion requested with {len(messages)} message(s), stream={request.stream}")

    try:
        if not request.stream:
            return relay.complete_once(client, messages, settings.OPENAI_MODEL)
        stream = relay.open_completion_stream(client, messages, settings.OPENAI_MODEL)
    except ExternalServiceError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return StreamingResponse(
        relay.relay_completion_stream(stream),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache"}
    )
