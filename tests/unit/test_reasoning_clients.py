"""
Unit tests for the HTTP reasoning clients.
"""

import json

import httpx
import pytest

from workflow_radar.core.config import AnthropicSettings, OpenAISettings, Settings
from workflow_radar.core.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    ModelCatalogError,
    UpstreamUnavailableError,
)
from workflow_radar.reasoning.anthropic_client import AnthropicClient
from workflow_radar.reasoning.catalog import (
    create_reasoning_client,
    get_static_models,
    list_providers,
)
from workflow_radar.reasoning.openai_client import OpenAIClient


def _transport(handler, seen=None):
    """MockTransport that records each request before answering."""

    def _handle(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return handler(request)

    return httpx.MockTransport(_handle)


def _anthropic(handler, seen=None, api_key="sk-ant-test") -> AnthropicClient:
    return AnthropicClient(
        api_key=api_key,
        base_url="https://anthropic.test",
        transport=_transport(handler, seen),
    )


def _openai(handler, seen=None, api_key="sk-test") -> OpenAIClient:
    return OpenAIClient(
        api_key=api_key,
        base_url="https://openai.test",
        transport=_transport(handler, seen),
    )


class TestAnthropicClient:
    """Tests for AnthropicClient."""

    @pytest.mark.asyncio
    async def test_generate(self):
        seen = []
        client = _anthropic(
            lambda request: httpx.Response(
                200,
                json={
                    "content": [
                        {"type": "text", "text": '{"ok": '},
                        {"type": "tool_use", "id": "t-1"},
                        {"type": "text", "text": "true}"},
                    ],
                    "stop_reason": "end_turn",
                },
            ),
            seen,
        )

        text = await client.generate("system rules", "the prompt", "claude-test")
        await client.close()

        assert text == '{"ok": true}'
        request = seen[0]
        assert request.url.path == "/v1/messages"
        assert request.headers["x-api-key"] == "sk-ant-test"
        assert request.headers["anthropic-version"] == "2023-06-01"
        body = json.loads(request.content)
        assert body["model"] == "claude-test"
        assert body["system"] == "system rules"
        assert body["messages"] == [{"role": "user", "content": "the prompt"}]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [401, 429, 500, 529])
    async def test_provider_failure_is_upstream_unavailable(self, status_code):
        client = _anthropic(lambda request: httpx.Response(status_code, text="nope"))

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            await client.generate("s", "p", "m")

        assert exc_info.value.details["status_code"] == status_code
        assert exc_info.value.retryable

    @pytest.mark.asyncio
    async def test_bad_request_is_invalid_request(self):
        client = _anthropic(lambda request: httpx.Response(400, text="bad model"))

        with pytest.raises(InvalidRequestError) as exc_info:
            await client.generate("s", "p", "m")

        assert exc_info.value.retryable is False

    @pytest.mark.asyncio
    async def test_network_error_is_upstream_unavailable(self):
        def _fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = _anthropic(_fail)

        with pytest.raises(UpstreamUnavailableError):
            await client.generate("s", "p", "m")

    @pytest.mark.asyncio
    async def test_non_json_envelope(self):
        client = _anthropic(lambda request: httpx.Response(200, text="<html>"))

        with pytest.raises(UpstreamUnavailableError):
            await client.generate("s", "p", "m")

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_any_request(self):
        seen = []
        client = _anthropic(lambda request: httpx.Response(200, json={}), seen, api_key="")

        with pytest.raises(ConfigurationError):
            await client.generate("s", "p", "m")

        assert seen == []

    @pytest.mark.asyncio
    async def test_list_models(self):
        client = _anthropic(
            lambda request: httpx.Response(
                200,
                json={
                    "data": [
                        {"id": "claude-a", "display_name": "Claude A", "created_at": "2024-10-22"},
                        {"id": "claude-b"},
                    ]
                },
            )
        )

        models = await client.list_models()

        assert [m.id for m in models] == ["claude-a", "claude-b"]
        assert models[0].name == "Claude A"
        assert models[0].description == "Created: 2024-10-22"
        assert models[1].name == "claude-b"
        assert all(m.provider == "anthropic" for m in models)

    @pytest.mark.asyncio
    async def test_list_models_rejected(self):
        client = _anthropic(lambda request: httpx.Response(404, text="not found"))

        with pytest.raises(ModelCatalogError) as exc_info:
            await client.list_models()

        assert exc_info.value.details == {"provider": "anthropic"}

    @pytest.mark.asyncio
    async def test_list_models_without_data(self):
        client = _anthropic(lambda request: httpx.Response(200, json={"models": []}))

        with pytest.raises(ModelCatalogError):
            await client.list_models()


class TestOpenAIClient:
    """Tests for OpenAIClient."""

    @pytest.mark.asyncio
    async def test_generate(self):
        seen = []
        client = _openai(
            lambda request: httpx.Response(
                200,
                json={"choices": [{"message": {"role": "assistant", "content": "{}"}}]},
            ),
            seen,
        )

        text = await client.generate("system rules", "the prompt", "gpt-4o")

        assert text == "{}"
        request = seen[0]
        assert request.url.path == "/v1/chat/completions"
        assert request.headers["authorization"] == "Bearer sk-test"
        body = json.loads(request.content)
        assert body["messages"][0] == {"role": "system", "content": "system rules"}
        assert body["messages"][1] == {"role": "user", "content": "the prompt"}

    @pytest.mark.asyncio
    async def test_generate_without_choices(self):
        client = _openai(lambda request: httpx.Response(200, json={"choices": []}))

        with pytest.raises(UpstreamUnavailableError):
            await client.generate("s", "p", "m")

    @pytest.mark.asyncio
    async def test_list_models_filters_and_orders(self):
        client = _openai(
            lambda request: httpx.Response(
                200,
                json={
                    "data": [
                        {"id": "whisper-1", "owned_by": "openai"},
                        {"id": "gpt-3.5-turbo", "owned_by": "openai"},
                        {"id": "gpt-4o", "owned_by": "system"},
                        {"id": "o1-mini", "owned_by": "system"},
                        {"id": "text-embedding-3-small", "owned_by": "system"},
                    ]
                },
            )
        )

        models = await client.list_models()

        assert [m.id for m in models] == ["o1-mini", "gpt-4o", "gpt-3.5-turbo"]
        assert models[1].name == "Gpt 4O"
        assert models[1].description == "Owned by: system"


class TestCatalog:
    """Tests for the static catalog and client factory."""

    def test_providers(self):
        assert list_providers() == ["anthropic", "openai", "google"]

    def test_static_models(self):
        assert get_static_models("google")[0].provider == "google"
        assert get_static_models("mistral") is None

    def test_factory_builds_configured_client(self):
        settings = Settings(
            anthropic=AnthropicSettings(api_key="a-key"),
            openai=OpenAISettings(api_key="o-key"),
        )

        anthropic = create_reasoning_client(settings, "anthropic")
        openai = create_reasoning_client(settings, "OpenAI")

        assert isinstance(anthropic, AnthropicClient)
        assert anthropic.api_key == "a-key"
        assert isinstance(openai, OpenAIClient)
        assert openai.api_key == "o-key"

    def test_factory_rejects_unknown_provider(self):
        with pytest.raises(ConfigurationError):
            create_reasoning_client(Settings(), "google")
