"""Tests for myguard/services/llm_service.py — provider fallback and errors."""

import asyncio

import pytest
from unittest.mock import AsyncMock, MagicMock

from myguard.config import Settings
from myguard.exceptions import CollaboratorError
from myguard.services.llm_service import LLMService


def _anthropic_response(text):
    response = MagicMock()
    response.content = [MagicMock(text=text)]
    return response


def _openai_response(text):
    response = MagicMock()
    response.choices = [MagicMock(message=MagicMock(content=text))]
    return response


@pytest.fixture
def llm_service():
    """LLMService with mocked Anthropic/OpenAI clients."""
    settings = Settings(
        _env_file=None,
        anthropic_api_key="test-key",
        openai_api_key="test-key",
        primary_llm_model="claude-test",
        fallback_llm_model="gpt-test",
    )
    svc = LLMService(settings)

    mock_anthropic = MagicMock()
    mock_anthropic.messages.create = AsyncMock(return_value=_anthropic_response("Allowed"))
    svc._anthropic = mock_anthropic

    mock_openai = MagicMock()
    mock_openai.chat.completions.create = AsyncMock(return_value=_openai_response("Not Allowed"))
    svc._openai = mock_openai

    return svc


class TestGenerate:

    def test_primary(self, llm_service):
        text, model = asyncio.run(llm_service.generate(None, "user"))
        assert text == "Allowed"
        assert model == "claude-test"

    def test_fallback_on_error(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("API error")
        text, model = asyncio.run(llm_service.generate(None, "user"))
        assert text == "Not Allowed"
        assert model == "gpt-test"

    def test_fallback_on_empty(self, llm_service):
        llm_service._anthropic.messages.create.return_value = _anthropic_response("  ")
        text, model = asyncio.run(llm_service.generate(None, "user"))
        assert model == "gpt-test"

    def test_all_providers_fail(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("Fail")
        llm_service._openai.chat.completions.create.side_effect = Exception("Also fail")
        with pytest.raises(CollaboratorError):
            asyncio.run(llm_service.generate(None, "user"))

    def test_single_attempt_per_provider(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("Fail")
        llm_service._openai.chat.completions.create.side_effect = Exception("Also fail")
        with pytest.raises(CollaboratorError):
            asyncio.run(llm_service.generate(None, "user"))
        assert llm_service._anthropic.messages.create.await_count == 1
        assert llm_service._openai.chat.completions.create.await_count == 1

    def test_no_providers(self):
        svc = LLMService(Settings(_env_file=None, anthropic_api_key="", openai_api_key=""))
        with pytest.raises(CollaboratorError):
            asyncio.run(svc.prompt("hello"))


class TestPromptAndChat:

    def test_prompt_omits_system(self, llm_service):
        asyncio.run(llm_service.prompt("classify this"))
        kwargs = llm_service._anthropic.messages.create.await_args.kwargs
        assert "system" not in kwargs
        assert kwargs["messages"] == [{"role": "user", "content": "classify this"}]

    def test_chat_passes_system(self, llm_service):
        asyncio.run(llm_service.chat("You are helpful", "question"))
        kwargs = llm_service._anthropic.messages.create.await_args.kwargs
        assert kwargs["system"] == "You are helpful"

    def test_openai_messages(self, llm_service):
        llm_service._anthropic.messages.create.side_effect = Exception("Fail")
        asyncio.run(llm_service.chat("sys", "question"))
        kwargs = llm_service._openai.chat.completions.create.await_args.kwargs
        assert kwargs["messages"][0] == {"role": "system", "content": "sys"}
