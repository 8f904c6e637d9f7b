"""Tests for myguard/config.py — Settings defaults and caching."""

from pathlib import Path

from myguard.config import Settings, get_settings


class TestSettingsDefaults:

    def test_similarity_threshold(self, test_settings):
        assert test_settings.similarity_threshold == 0.5

    def test_min_model_words(self, test_settings):
        assert test_settings.min_model_words == 3

    def test_concurrency_default_is_sequential(self):
        s = Settings(_env_file=None)
        assert s.llm_max_concurrency == 1

    def test_primary_llm_provider_default(self, test_settings):
        assert test_settings.primary_llm_provider == "anthropic"

    def test_fallback_llm_provider_default(self, test_settings):
        assert test_settings.fallback_llm_provider == "openai"

    def test_dataset_path_is_path(self):
        s = Settings(_env_file=None, dataset_path="somewhere/data.csv")
        assert s.dataset_path == Path("somewhere/data.csv")


class TestLLMConfigured:

    def test_no_keys(self, test_settings):
        assert test_settings.llm_configured is False

    def test_openai_only(self):
        s = Settings(_env_file=None, anthropic_api_key="", openai_api_key="sk-test")
        assert s.llm_configured is True


class TestEnvironment:

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("LLM_TIMEOUT", "12.5")
        monkeypatch.setenv("LLM_MAX_CONCURRENCY", "4")
        s = Settings(_env_file=None)
        assert s.llm_timeout == 12.5
        assert s.llm_max_concurrency == 4


class TestGetSettings:

    def test_returns_instance(self):
        assert isinstance(get_settings(), Settings)

    def test_returns_singleton(self):
        assert get_settings() is get_settings()
