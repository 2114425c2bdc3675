"""
Static model catalog and reasoning client construction.
"""

from __future__ import annotations

from typing import Optional

import httpx

from workflow_radar.core.config import Settings
from workflow_radar.core.exceptions import ConfigurationError
from workflow_radar.reasoning.anthropic_client import AnthropicClient
from workflow_radar.reasoning.base import HTTPReasoningClient, ModelInfo
from workflow_radar.reasoning.openai_client import OpenAIClient

# Known models per provider, served without calling any provider API
PROVIDER_MODELS: dict[str, list[ModelInfo]] = {
    "anthropic": [
        ModelInfo(id="claude-3-5-sonnet-20241022", name="Claude 3.5 Sonnet", provider="anthropic", description="Most capable, balanced model"),
        ModelInfo(id="claude-3-5-haiku-20241022", name="Claude 3.5 Haiku", provider="anthropic", description="Fast, efficient model"),
        ModelInfo(id="claude-3-opus-20240229", name="Claude 3 Opus", provider="anthropic", description="Powerful model for complex tasks"),
        ModelInfo(id="claude-3-sonnet-20240229", name="Claude 3 Sonnet", provider="anthropic", description="Balanced performance"),
        ModelInfo(id="claude-3-haiku-20240307", name="Claude 3 Haiku", provider="anthropic", description="Fastest model"),
    ],
    "openai": [
        ModelInfo(id="gpt-4o", name="GPT-4o", provider="openai", description="Latest multimodal flagship model"),
        ModelInfo(id="gpt-4o-mini", name="GPT-4o Mini", provider="openai", description="Affordable small model"),
        ModelInfo(id="gpt-4-turbo", name="GPT-4 Turbo", provider="openai", description="Latest GPT-4 Turbo model"),
        ModelInfo(id="gpt-4", name="GPT-4", provider="openai", description="Standard GPT-4 model"),
        ModelInfo(id="o1-preview", name="O1 Preview", provider="openai", description="Reasoning model preview"),
        ModelInfo(id="o1-mini", name="O1 Mini", provider="openai", description="Smaller reasoning model"),
    ],
    "google": [
        ModelInfo(id="gemini-2.0-flash-exp", name="Gemini 2.0 Flash", provider="google", description="Experimental next-gen model"),
        ModelInfo(id="gemini-1.5-pro", name="Gemini 1.5 Pro", provider="google", description="Advanced reasoning and analysis"),
        ModelInfo(id="gemini-1.5-flash", name="Gemini 1.5 Flash", provider="google", description="Fast and versatile"),
        ModelInfo(id="gemini-1.5-flash-8b", name="Gemini 1.5 Flash 8B", provider="google", description="Smaller, faster variant"),
        ModelInfo(id="gemini-pro", name="Gemini Pro", provider="google", description="Versatile model for text generation"),
    ],
}

LIVE_PROVIDERS = ("anthropic", "openai")


def list_providers() -> list[str]:
    return list(PROVIDER_MODELS)


def get_static_models(provider: str) -> Optional[list[ModelInfo]]:
    """Catalog entries for a provider, or None for an unknown provider."""
    return PROVIDER_MODELS.get(provider)


def create_reasoning_client(
    settings: Settings,
    provider: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> HTTPReasoningClient:
    """
    Build the HTTP client for a provider from settings.

    The credential is read here once; a missing key only fails when the
    client is first used, so the service can start without one.
    """
    provider = (provider or settings.reasoning.provider).lower()
    common = {
        "timeout": settings.reasoning.timeout,
        "max_tokens": settings.reasoning.max_tokens,
        "temperature": settings.reasoning.temperature,
        "transport": transport,
    }

    if provider == "anthropic":
        return AnthropicClient(
            api_key=settings.anthropic.api_key,
            base_url=settings.anthropic.base_url,
            api_version=settings.anthropic.api_version,
            **common,
        )
    if provider == "openai":
        return OpenAIClient(
            api_key=settings.openai.api_key,
            base_url=settings.openai.base_url,
            **common,
        )

    raise ConfigurationError(
        f"No live client for provider '{provider}'",
        details={"provider": provider, "supported": list(LIVE_PROVIDERS)},
    )
