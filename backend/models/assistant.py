from typing import Any, Optional

from pydantic import BaseModel


class AskAssistantRequest(BaseModel):
    # Validated in the route so a missing/blank prompt gets the 400 message, not a 422
    prompt: Optional[Any] = None
    user_id: Optional[str] = None


class AskAssistantResponse(BaseModel):
    reply: str
