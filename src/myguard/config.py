"""
Configuration management for MyGuard.

Loads settings from environment variables with sensible defaults.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # ==========================================================================
    # LLM API Keys
    # ==========================================================================
    anthropic_api_key: str = Field(default="", description="Anthropic API key for Claude")
    openai_api_key: str = Field(default="", description="OpenAI API key for GPT-4o")

    # ==========================================================================
    # LLM Configuration
    # ==========================================================================
    primary_llm_provider: Literal["anthropic", "openai"] = "anthropic"
    primary_llm_model: str = "claude-sonnet-4-20250514"
    fallback_llm_provider: Literal["anthropic", "openai"] = "openai"
    fallback_llm_model: str = "gpt-4o"
    llm_temperature: float = 0.0
    llm_max_tokens: int = 256
    llm_timeout: float = Field(default=30.0, gt=0, description="Per-call timeout in seconds")
    llm_max_concurrency: int = Field(default=1, ge=1, description="In-flight clause calls")
    llm_max_retries: int = Field(default=3, ge=1, description="Attempts for explanation prompts")

    # ==========================================================================
    # Classification
    # ==========================================================================
    dataset_path: Path = Path("./data/contract_dataset.csv")
    similarity_threshold: float = 0.5
    min_model_words: int = 3

    @field_validator("dataset_path", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        return Path(v) if isinstance(v, str) else v

    # ==========================================================================
    # API Configuration
    # ==========================================================================
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    @property
    def llm_configured(self) -> bool:
        """Whether any completion provider has credentials."""
        return bool(self.anthropic_api_key or self.openai_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
