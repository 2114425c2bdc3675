"""
Reasoning capability clients.
"""

from workflow_radar.reasoning.anthropic_client import AnthropicClient
from workflow_radar.reasoning.base import HTTPReasoningClient, ModelInfo, ReasoningClient
from workflow_radar.reasoning.catalog import (
    PROVIDER_MODELS,
    create_reasoning_client,
    get_static_models,
    list_providers,
)
from workflow_radar.reasoning.openai_client import OpenAIClient

__all__ = [
    "AnthropicClient",
    "HTTPReasoningClient",
    "ModelInfo",
    "OpenAIClient",
    "PROVIDER_MODELS",
    "ReasoningClient",
    "create_reasoning_client",
    "get_static_models",
    "list_providers",
]
