"""
Reasoning capability boundary.

The capability is consumed as an opaque ``generate(system, prompt, model) -> text``
function. Nothing here validates the returned text; callers own that.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx
from pydantic import BaseModel
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from workflow_radar.core.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    ModelCatalogError,
    UpstreamUnavailableError,
)
from workflow_radar.core.logging import get_logger

logger = get_logger(__name__)

# Provider statuses that mean the request itself was wrong
CLIENT_ERROR_STATUSES = frozenset({400, 404, 422})


class ModelInfo(BaseModel):
    """A model offered by a provider."""

    id: str
    name: str
    provider: str
    description: str = ""


class ReasoningClient(ABC):
    """Abstract reasoning capability."""

    provider: str = "unknown"

    @abstractmethod
    async def generate(self, system: str, prompt: str, model: str) -> str:
        """
        Produce text for a system contract and a prompt.

        Raises:
            UpstreamUnavailableError: network, auth or provider-side failure
            InvalidRequestError: the provider rejected the request as malformed
        """

    @abstractmethod
    async def list_models(self) -> list[ModelInfo]:
        """List the models available to the configured credential."""

    async def close(self) -> None:
        """Release any held resources."""


class HTTPReasoningClient(ReasoningClient):
    """
    Base class for providers reached over HTTP.
    Provides the shared httpx client and error mapping.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str,
        timeout: float = 60.0,
        max_tokens: int = 4096,
        temperature: float = 0.3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Initialize the client.

        Args:
            api_key: Provider credential
            base_url: Provider API base URL
            timeout: Request timeout in seconds
            max_tokens: Max tokens per generated response
            temperature: Sampling temperature
            transport: Optional httpx transport (tests inject a MockTransport)
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.max_tokens = max_tokens
        self.temperature = temperature
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @abstractmethod
    def _auth_headers(self) -> dict[str, str]:
        """Provider-specific authentication headers."""

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={"Content-Type": "application/json", **self._auth_headers()},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    def _require_api_key(self) -> None:
        if not self.api_key:
            raise ConfigurationError(
                f"{self.provider.capitalize()} API key not configured",
                details={"provider": self.provider},
            )

    async def _request(
        self,
        method: str,
        endpoint: str,
        data: Optional[dict[str, Any]] = None,
    ) -> dict[str, Any]:
        """
        Make one HTTP request to the provider.

        Raises:
            InvalidRequestError: provider rejected the request (400/404/422)
            UpstreamUnavailableError: any other failure reaching the provider
        """
        self._require_api_key()
        client = await self._get_client()
        started = time.monotonic()

        try:
            response = await client.request(method=method, url=endpoint, json=data)
            response.raise_for_status()
            body = response.json()

        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.error(
                "Provider request failed",
                provider=self.provider,
                endpoint=endpoint,
                status_code=status_code,
                response_text=e.response.text[:500],
            )
            if status_code in CLIENT_ERROR_STATUSES:
                raise InvalidRequestError(
                    f"{self.provider} rejected the request (HTTP {status_code}): {e.response.text[:200]}"
                ) from e
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message=f"HTTP {status_code}",
                details={"endpoint": endpoint, "status_code": status_code},
            ) from e

        except httpx.RequestError as e:
            logger.error(
                "Provider request error",
                provider=self.provider,
                endpoint=endpoint,
                error=str(e),
            )
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message=f"Request failed: {e}",
                details={"endpoint": endpoint},
            ) from e

        except ValueError as e:
            # Body was not JSON: the provider envelope itself is broken
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message="Provider returned a non-JSON envelope",
                details={"endpoint": endpoint},
            ) from e

        logger.debug(
            "Provider request complete",
            provider=self.provider,
            endpoint=endpoint,
            elapsed_ms=round((time.monotonic() - started) * 1000, 1),
        )
        if not isinstance(body, dict):
            raise UpstreamUnavailableError(
                service_name=self.provider,
                message="Provider returned an unexpected envelope",
                details={"endpoint": endpoint},
            )
        return body

    @retry(
        retry=retry_if_exception_type(UpstreamUnavailableError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=1, max=10),
        reraise=True,
    )
    async def _get_model_list(self, endpoint: str) -> list[dict[str, Any]]:
        """GET a provider model listing; idempotent, so retried with backoff."""
        body = await self._request("GET", endpoint)
        data = body.get("data")
        if not isinstance(data, list):
            raise ModelCatalogError(self.provider, "response has no 'data' list")
        return [item for item in data if isinstance(item, dict) and "id" in item]
