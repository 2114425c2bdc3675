"""
Configuration management using Pydantic Settings.
Loads settings from environment variables and .env files.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReasoningSettings(BaseSettings):
    """Reasoning capability configuration."""

    model_config = SettingsConfigDict(env_prefix="REASONING_")

    provider: str = Field(default="anthropic", description="Provider backing generate() (anthropic/openai)")
    default_model: str = Field(
        default="claude-3-5-sonnet-20241022",
        description="Model used when a request does not select one",
    )
    temperature: float = Field(default=0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(default=4096, description="Max tokens per response")
    timeout: float = Field(default=60.0, description="Request timeout in seconds")

    # Caller-side retry policy (1 = single attempt, no retry)
    max_attempts: int = Field(default=1, ge=1, description="Attempts per API request for retryable failures")
    backoff_min: float = Field(default=1.0, description="Minimum backoff between attempts in seconds")
    backoff_max: float = Field(default=10.0, description="Maximum backoff between attempts in seconds")

    @field_validator("provider")
    @classmethod
    def validate_provider(cls, v: str) -> str:
        allowed = {"anthropic", "openai"}
        if v.lower() not in allowed:
            raise ValueError(f"provider must be one of {allowed}")
        return v.lower()


class AnthropicSettings(BaseSettings):
    """Anthropic API configuration."""

    model_config = SettingsConfigDict(env_prefix="ANTHROPIC_")

    api_key: str = Field(default="", description="Anthropic API key")
    base_url: str = Field(default="https://api.anthropic.com", description="Anthropic API base URL")
    api_version: str = Field(default="2023-06-01", description="anthropic-version header value")


class OpenAISettings(BaseSettings):
    """OpenAI API configuration."""

    model_config = SettingsConfigDict(env_prefix="OPENAI_")

    api_key: str = Field(default="", description="OpenAI API key")
    base_url: str = Field(default="https://api.openai.com", description="OpenAI API base URL")


class AggregationSettings(BaseSettings):
    """Workflow aggregation configuration."""

    model_config = SettingsConfigDict(env_prefix="AGGREGATION_")

    idle_after_hours: float = Field(
        default=72.0,
        gt=0,
        description="A workflow with no events for this long is considered idle",
    )


class InterpretationSettings(BaseSettings):
    """Free-text interpretation configuration."""

    model_config = SettingsConfigDict(env_prefix="INTERPRETATION_")

    max_input_chars: int = Field(default=500, ge=1, description="Longest accepted free-text input")


class SecuritySettings(BaseSettings):
    """Security configuration."""

    model_config = SettingsConfigDict(env_prefix="SECURITY_")

    allowed_origins: list[str] = Field(
        default=["http://localhost:3000"],
        description="CORS allowed origins",
    )


class Settings(BaseSettings):
    """Main application settings aggregating all sub-settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="workflow-radar", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=True, description="Debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, description="Server port")

    # Sub-settings
    reasoning: ReasoningSettings = Field(default_factory=ReasoningSettings)
    anthropic: AnthropicSettings = Field(default_factory=AnthropicSettings)
    openai: OpenAISettings = Field(default_factory=OpenAISettings)
    aggregation: AggregationSettings = Field(default_factory=AggregationSettings)
    interpretation: InterpretationSettings = Field(default_factory=InterpretationSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)

    @field_validator("app_env")
    @classmethod
    def validate_app_env(cls, v: str) -> str:
        allowed = {"development", "staging", "production"}
        if v.lower() not in allowed:
            raise ValueError(f"app_env must be one of {allowed}")
        return v.lower()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed:
            raise ValueError(f"log_level must be one of {allowed}")
        return v.upper()

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.app_env == "development"

    def provider_api_key(self, provider: Optional[str] = None) -> str:
        """Credential for the given provider (defaults to the reasoning provider)."""
        provider = (provider or self.reasoning.provider).lower()
        if provider == "anthropic":
            return self.anthropic.api_key
        if provider == "openai":
            return self.openai.api_key
        return ""


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# Convenience accessor for module-level use
settings = get_settings()
