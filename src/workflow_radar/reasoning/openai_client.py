"""
OpenAI Chat Completions client.
"""

from __future__ import annotations

from workflow_radar.core.exceptions import InvalidRequestError, ModelCatalogError, UpstreamUnavailableError
from workflow_radar.core.logging import get_logger
from workflow_radar.reasoning.base import HTTPReasoningClient, ModelInfo

logger = get_logger(__name__)

CHAT_MODEL_MARKERS = ("gpt", "o1", "chatgpt")

# Latest models first when listing
MODEL_ORDER = ["o1-preview", "o1-mini", "gpt-4o", "gpt-4o-mini", "gpt-4-turbo", "gpt-4", "gpt-3.5-turbo"]


def _order_index(model_id: str) -> int:
    for index, prefix in enumerate(MODEL_ORDER):
        if model_id.startswith(prefix):
            return index
    return len(MODEL_ORDER)


def _display_name(model_id: str) -> str:
    return model_id.replace("-", " ").title()


class OpenAIClient(HTTPReasoningClient):
    """Reasoning capability backed by the OpenAI Chat Completions API."""

    provider = "openai"

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.api_key}"}

    async def generate(self, system: str, prompt: str, model: str) -> str:
        logger.info("Calling OpenAI", model=model, prompt_chars=len(prompt))

        body = await self._request(
            "POST",
            "/v1/chat/completions",
            data={
                "model": model,
                "max_tokens": self.max_tokens,
                "temperature": self.temperature,
                "messages": [
                    {"role": "system", "content": system},
                    {"role": "user", "content": prompt},
                ],
            },
        )

        try:
            text = body["choices"][0]["message"]["content"] or ""
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message="Response has no message content",
            ) from e

        logger.info("OpenAI response received", model=model, response_chars=len(text))
        return text

    async def list_models(self) -> list[ModelInfo]:
        try:
            items = await self._get_model_list("/v1/models")
        except (InvalidRequestError, UpstreamUnavailableError) as e:
            raise ModelCatalogError(self.provider, e.message) from e

        chat_models = [
            item for item in items
            if any(marker in item["id"] for marker in CHAT_MODEL_MARKERS)
        ]
        # sorted() is stable, so models outside MODEL_ORDER keep API order
        chat_models = sorted(chat_models, key=lambda item: _order_index(item["id"]))

        return [
            ModelInfo(
                id=item["id"],
                name=_display_name(item["id"]),
                provider=self.provider,
                description=f"Owned by: {item.get('owned_by', 'unknown')}",
            )
            for item in chat_models
        ]
