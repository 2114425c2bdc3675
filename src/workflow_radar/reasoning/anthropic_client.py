"""
Anthropic Messages API client.
"""

from __future__ import annotations

from workflow_radar.core.exceptions import InvalidRequestError, ModelCatalogError, UpstreamUnavailableError
from workflow_radar.core.logging import get_logger
from workflow_radar.reasoning.base import HTTPReasoningClient, ModelInfo

logger = get_logger(__name__)


class AnthropicClient(HTTPReasoningClient):
    """Reasoning capability backed by the Anthropic Messages API."""

    provider = "anthropic"

    def __init__(self, *args, api_version: str = "2023-06-01", **kwargs) -> None:
        self.api_version = api_version
        super().__init__(*args, **kwargs)

    def _auth_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self.api_key,
            "anthropic-version": self.api_version,
        }

    async def generate(self, system: str, prompt: str, model: str) -> str:
        logger.info("Calling Anthropic", model=model, prompt_chars=len(prompt))

        body = await self._request(
            "POST",
            "/v1/messages",
            data={
                "model": model,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "system": system,
                "messages": [{"role": "user", "content": prompt}],
            },
        )

        blocks = body.get("content")
        if not isinstance(blocks, list):
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message="Response has no content blocks",
            )

        text = "".join(
            block.get("text", "")
            for block in blocks
            if isinstance(block, dict) and block.get("type") == "text"
        )
        logger.info(
            "Anthropic response received",
            model=model,
            response_chars=len(text),
            stop_reason=body.get("stop_reason"),
        )
        return text

    async def list_models(self) -> list[ModelInfo]:
        try:
            items = await self._get_model_list("/v1/models")
        except (InvalidRequestError, UpstreamUnavailableError) as e:
            raise ModelCatalogError(self.provider, e.message) from e

        return [
            ModelInfo(
                id=item["id"],
                name=item.get("display_name") or item["id"],
                provider=self.provider,
                description=f"Created: {item.get('created_at', 'unknown')}",
            )
            for item in items
        ]
