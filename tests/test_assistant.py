"""
Assistant client tests with the LiteLLM call replaced by a local coroutine.
"""

import asyncio
from types import SimpleNamespace

import litellm
import pytest

from backend.services import assistant as assistant_module
from backend.services import AssistantBlockedError, AssistantError, GeminiAssistant


def completion(content="Try the film camera.", finish_reason="stop"):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason=finish_reason)])


class TestGeminiAssistant:
    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch):
        self.calls = []
        self.response = completion()
        self.error = None

        async def fake_acompletion(**kwargs):
            self.calls.append(kwargs)
            if self.error:
                raise self.error
            return self.response

        monkeypatch.setattr(assistant_module, "acompletion", fake_acompletion)
        self.assistant = GeminiAssistant(api_key=" key ")

    def ask(self, prompt="Any cameras?"):
        return asyncio.run(self.assistant.ask(prompt, user_id="u1"))

    def test_reply(self):
        assert self.ask() == "Try the film camera."
        [call] = self.calls
        assert call["model"] == "gemini/gemini-2.0-flash"
        assert call["api_key"] == "key"
        assert call["messages"] == [{"role": "user", "content": "Any cameras?"}]
        assert call["safety_settings"] == assistant_module.SAFETY_SETTINGS

    def test_filtered_reply_is_blocked(self):
        self.response = completion(content=None, finish_reason="content_filter")
        with pytest.raises(AssistantBlockedError) as exc:
            self.ask()
        assert exc.value.client_message == "Request blocked (Safety)."

    def test_no_choices_is_blocked(self):
        self.response = SimpleNamespace(choices=[])
        with pytest.raises(AssistantBlockedError):
            self.ask()

    def test_empty_reply_is_blocked(self):
        self.response = completion(content="")
        with pytest.raises(AssistantBlockedError) as exc:
            self.ask()
        assert exc.value.reason == "Empty response"

    def test_content_policy_violation(self):
        self.error = litellm.ContentPolicyViolationError(
            message="blocked", model="gemini-2.0-flash", llm_provider="gemini"
        )
        with pytest.raises(AssistantBlockedError):
            self.ask()

    def test_safety_error_message(self):
        self.error = RuntimeError("candidate finished with SAFETY")
        with pytest.raises(AssistantError) as exc:
            self.ask()
        assert not isinstance(exc.value, AssistantBlockedError)
        assert exc.value.client_message == "Request blocked by safety filters."

    def test_provider_failure(self):
        self.error = RuntimeError("quota exceeded")
        with pytest.raises(AssistantError) as exc:
            self.ask()
        assert exc.value.client_message == "Failed to process request with AI model."

    def test_requires_api_key(self):
        with pytest.raises(ValueError):
            GeminiAssistant(api_key="  ")
