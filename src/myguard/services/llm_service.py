"""
LLM service used as the external completion collaborator.

Supports Claude (Anthropic) and GPT-4o (OpenAI) with automatic fallback.
"""

import structlog
from anthropic import AsyncAnthropic
from openai import AsyncOpenAI

from myguard.config import Settings, get_settings
from myguard.exceptions import CollaboratorError

logger = structlog.get_logger(__name__)


class LLMService:
    """
    Async completion client.

    The primary provider is tried first; any error or empty completion
    moves on to the fallback provider. When every provider fails a
    CollaboratorError is raised.
    """

    def __init__(self, settings: Settings | None = None):
        settings = settings or get_settings()
        self.settings = settings

        # Initialize clients
        self._anthropic: AsyncAnthropic | None = None
        self._openai: AsyncOpenAI | None = None

        if settings.anthropic_api_key:
            self._anthropic = AsyncAnthropic(
                api_key=settings.anthropic_api_key, timeout=settings.llm_timeout
            )
        if settings.openai_api_key:
            self._openai = AsyncOpenAI(
                api_key=settings.openai_api_key, timeout=settings.llm_timeout
            )

        self.primary_provider = settings.primary_llm_provider
        self.primary_model = settings.primary_llm_model
        self.fallback_provider = settings.fallback_llm_provider
        self.fallback_model = settings.fallback_llm_model

    # =========================================================================
    # Core LLM Calls
    # =========================================================================

    async def _call_anthropic(
        self, model: str, system_prompt: str | None, user_prompt: str
    ) -> str:
        """Call Anthropic Claude API."""
        if self._anthropic is None:
            raise CollaboratorError("Anthropic client not configured. Set ANTHROPIC_API_KEY.")
        kwargs = {
            "model": model,
            "max_tokens": self.settings.llm_max_tokens,
            "temperature": self.settings.llm_temperature,
            "messages": [{"role": "user", "content": user_prompt}],
        }
        if system_prompt:
            kwargs["system"] = system_prompt
        response = await self._anthropic.messages.create(**kwargs)
        return response.content[0].text if response.content else ""

    async def _call_openai(
        self, model: str, system_prompt: str | None, user_prompt: str
    ) -> str:
        """Call OpenAI chat completions API."""
        if self._openai is None:
            raise CollaboratorError("OpenAI client not configured. Set OPENAI_API_KEY.")
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_prompt})
        response = await self._openai.chat.completions.create(
            model=model,
            max_tokens=self.settings.llm_max_tokens,
            temperature=self.settings.llm_temperature,
            messages=messages,
        )
        return response.choices[0].message.content or ""

    def _providers(self) -> list[tuple[str, str]]:
        """Configured (provider, model) pairs in the order they are tried."""
        candidates = [
            (self.primary_provider, self.primary_model),
            (self.fallback_provider, self.fallback_model),
        ]
        available = {"anthropic": self._anthropic, "openai": self._openai}
        providers = []
        for provider, model in candidates:
            if available.get(provider) is not None and (provider, model) not in providers:
                providers.append((provider, model))
        return providers

    async def generate(
        self, system_prompt: str | None, user_prompt: str
    ) -> tuple[str, str]:
        """
        Generate a completion with automatic fallback.

        Returns (response_text, model_used).
        """
        providers = self._providers()
        if not providers:
            raise CollaboratorError("No LLM provider available")

        last_error: Exception | None = None
        for provider, model in providers:
            try:
                if provider == "anthropic":
                    text = await self._call_anthropic(model, system_prompt, user_prompt)
                else:
                    text = await self._call_openai(model, system_prompt, user_prompt)
            except Exception as e:
                logger.warning("llm_call_failed", provider=provider, model=model, error=str(e))
                last_error = e
                continue

            if not text.strip():
                logger.warning("llm_empty_response", provider=provider, model=model)
                last_error = CollaboratorError(f"{provider} returned an empty response")
                continue
            return text, model

        raise CollaboratorError(f"All LLM providers failed: {last_error}") from last_error

    async def prompt(self, text: str) -> str:
        """Single-turn prompt without a system message."""
        response, _ = await self.generate(None, text)
        return response

    async def chat(self, system_prompt: str, user_text: str) -> str:
        """Single-turn exchange with a system message."""
        response, _ = await self.generate(system_prompt, user_text)
        return response
