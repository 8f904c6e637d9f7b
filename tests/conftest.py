"""Shared pytest fixtures and fakes for the MyGuard test suite."""

import asyncio

import pytest
import structlog

from myguard.classification.rules import RuleScorer
from myguard.classification.similarity import SimilarityClassifier
from myguard.config import Settings
from myguard.corpus.loader import seed_corpus
from myguard.services.analysis_service import ContractAnalyzer


# ---------------------------------------------------------------------------
# Singleton cache clearing (autouse)
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def clear_singletons():
    """Clear all @lru_cache singletons and logging config between tests."""
    from myguard.config import get_settings
    from myguard.services.analysis_service import get_contract_analyzer

    get_settings.cache_clear()
    get_contract_analyzer.cache_clear()
    yield
    get_settings.cache_clear()
    get_contract_analyzer.cache_clear()
    # The CLI binds structlog to its captured stderr
    structlog.reset_defaults()


# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------

class FakeCompletionClient:
    """In-memory completion collaborator.

    Returns the response of the first key found in the prompt, else the
    default. Records every prompt it receives.
    """

    def __init__(self, responses=None, default="Allowed", error=None, delay=0.0):
        self.responses = dict(responses or {})
        self.default = default
        self.error = error
        self.delay = delay
        self.prompts = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def prompt(self, text):
        self.prompts.append(text)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            if self.error is not None:
                raise self.error
            for key, response in self.responses.items():
                if key in text:
                    return response
            return self.default
        finally:
            self.in_flight -= 1

    async def chat(self, system_prompt, user_text):
        return await self.prompt(user_text)


@pytest.fixture
def make_client():
    """Factory for FakeCompletionClient instances."""
    return FakeCompletionClient


# ---------------------------------------------------------------------------
# Sample data fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def test_settings():
    """Settings isolated from the environment and any .env file."""
    return Settings(
        _env_file=None,
        anthropic_api_key="",
        openai_api_key="",
        llm_timeout=1.0,
        llm_max_concurrency=1,
        llm_max_retries=1,
    )


@pytest.fixture
def corpus():
    return seed_corpus()


@pytest.fixture
def similarity(corpus):
    return SimilarityClassifier(corpus)


@pytest.fixture
def scorer(similarity):
    return RuleScorer(similarity)


@pytest.fixture
def analyzer(corpus, test_settings):
    """Analyzer over the seed corpus with no language model."""
    return ContractAnalyzer(corpus, client=None, settings=test_settings)


@pytest.fixture
def lease_text():
    """Two-clause lease excerpt that exactly matches two seed records."""
    return (
        "The landlord may enter the premises at any time without notice. "
        "Rent shall be paid on the first day of each month."
    )
