"""Shopping assistant endpoint (Gemini)."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..models import AskAssistantRequest, AskAssistantResponse
from ..services import AssistantBlockedError, AssistantError
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/ask", response_model=AskAssistantResponse)
async def ask_assistant(request: AskAssistantRequest, state: AppState = Depends(get_state)):
    prompt = request.prompt
    if not isinstance(prompt, str) or not prompt.strip():
        logger.warning("[assistant] ask called without valid prompt")
        raise HTTPException(status_code=400, detail="A non-empty 'prompt' string is required.")

    assistant = state.assistant
    if assistant is None:
        logger.error("[assistant] GEMINI_API_KEY is not configured for this environment")
        raise HTTPException(status_code=500, detail="API key parameter not configured.")

    try:
        reply = await assistant.ask(prompt, user_id=request.user_id)
    except AssistantBlockedError as e:
        raise HTTPException(status_code=400, detail=e.client_message)
    except AssistantError as e:
        raise HTTPException(status_code=500, detail=e.client_message)
    return AskAssistantResponse(reply=reply)
