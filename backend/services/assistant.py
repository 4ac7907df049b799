"""
Shopping assistant: forwards a buyer's prompt to Gemini and returns the reply.

Uses LiteLLM so the provider call matches the rest of the stack; the API key is
passed per call rather than read from the process environment.
"""

import logging
from typing import Any, Dict, List, Optional

import litellm
from litellm import acompletion

logger = logging.getLogger(__name__)

# Suppress LiteLLM's verbose logging
litellm.suppress_debug_info = True

DEFAULT_MODEL = "gemini/gemini-2.0-flash"

SAFETY_SETTINGS: List[Dict[str, str]] = [
    {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_SEXUALLY_EXPLICIT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
    {"category": "HARM_CATEGORY_DANGEROUS_CONTENT", "threshold": "BLOCK_MEDIUM_AND_ABOVE"},
]


class AssistantError(Exception):
    """The model call failed. client_message is safe to return to the app."""

    def __init__(self, message: str, client_message: str = "Failed to process request with AI model."):
        super().__init__(message)
        self.client_message = client_message


class AssistantBlockedError(AssistantError):
    """The prompt or the reply was blocked by the safety filters."""

    def __init__(self, reason: str = "Safety"):
        message = f"Request blocked ({reason})."
        super().__init__(message, client_message=message)
        self.reason = reason


class GeminiAssistant:
    """Async client for one-shot assistant questions."""

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 30.0,
    ):
        if not api_key or not api_key.strip():
            raise ValueError("GeminiAssistant requires an API key")
        self._api_key = api_key.strip()
        self.model = model
        self._timeout = timeout

    async def ask(self, prompt: str, user_id: Optional[str] = None) -> str:
        """
        Send one user prompt; return the reply text.

        Raises:
            AssistantBlockedError: content filter stopped the prompt or the reply
            AssistantError: any other provider failure
        """
        logger.info("[assistant] calling %s for user %s", self.model, user_id or "anonymous")
        try:
            response = await acompletion(
                model=self.model,
                messages=[{"role": "user", "content": prompt}],
                safety_settings=SAFETY_SETTINGS,
                api_key=self._api_key,
                timeout=self._timeout,
            )
        except litellm.ContentPolicyViolationError as e:
            logger.warning("[assistant] prompt blocked: %s", e)
            raise AssistantBlockedError("Safety") from e
        except Exception as e:
            logger.error("[assistant] model call failed: %s", e)
            if "SAFETY" in str(e):
                raise AssistantError(str(e), client_message="Request blocked by safety filters.") from e
            raise AssistantError(str(e)) from e

        return _reply_text(response)


def _reply_text(response: Any) -> str:
    """Extract the reply; a filtered or empty completion counts as blocked."""
    choices = getattr(response, "choices", None) or []
    if not choices:
        raise AssistantBlockedError("Safety")
    choice = choices[0]
    finish_reason = getattr(choice, "finish_reason", None)
    if finish_reason in ("content_filter", "safety"):
        logger.warning("[assistant] reply blocked (finish_reason=%s)", finish_reason)
        raise AssistantBlockedError("Safety")
    content = getattr(getattr(choice, "message", None), "content", None)
    if not content:
        raise AssistantBlockedError("Empty response")
    logger.info("[assistant] received reply")
    return content
