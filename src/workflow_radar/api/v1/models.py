"""
Model listing endpoints.
"""

from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, Query

from workflow_radar.api.deps import get_client_factory
from workflow_radar.core.exceptions import InvalidRequestError
from workflow_radar.core.logging import get_logger
from workflow_radar.reasoning.base import ReasoningClient
from workflow_radar.reasoning.catalog import (
    LIVE_PROVIDERS,
    PROVIDER_MODELS,
    get_static_models,
    list_providers,
)

logger = get_logger(__name__)

router = APIRouter()


def _dump(models: list) -> list[dict[str, Any]]:
    return [m.model_dump() for m in models]


@router.get("/models")
async def list_models(
    provider: Optional[str] = Query(default=None),
) -> dict[str, Any]:
    """
    Static model catalog.

    With a known ``provider`` only that provider's models are returned.
    """
    if provider:
        models = get_static_models(provider)
        if models is not None:
            return {"provider": provider, "models": _dump(models)}

    return {
        "providers": list_providers(),
        "models": {name: _dump(models) for name, models in PROVIDER_MODELS.items()},
    }


@router.get("/models/{provider}")
async def list_provider_models(
    provider: str,
    client_for: Callable[[str], ReasoningClient] = Depends(get_client_factory),
) -> dict[str, Any]:
    """
    Models available to the configured credential, fetched from the provider.

    Providers without a live client are served from the static catalog.
    """
    provider = provider.lower()
    if provider not in LIVE_PROVIDERS:
        models = get_static_models(provider)
        if models is None:
            raise InvalidRequestError(f"Unknown provider '{provider}'", field="provider")
        return {"models": _dump(models)}

    logger.info("Listing provider models", provider=provider)
    models = await client_for(provider).list_models()
    return {"models": _dump(models)}
