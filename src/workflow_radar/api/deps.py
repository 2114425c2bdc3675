"""
API dependencies for dependency injection.
"""

from typing import Callable, Optional

from workflow_radar.core.config import Settings, get_settings
from workflow_radar.core.logging import get_logger
from workflow_radar.reasoning.base import ReasoningClient
from workflow_radar.reasoning.catalog import create_reasoning_client
from workflow_radar.services.radar_service import RadarService

logger = get_logger(__name__)


class ServiceContainer:
    """
    Container for all application services.
    Provides singleton instances of services.
    """

    _instance: Optional["ServiceContainer"] = None

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._initialized = False
        self._clients: dict[str, ReasoningClient] = {}

    @classmethod
    def get_instance(cls) -> "ServiceContainer":
        """Get the singleton instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def initialize(self) -> None:
        """Initialize all services."""
        if self._initialized:
            return

        client = self.client_for(self.settings.reasoning.provider)
        self._radar_service = RadarService(client=client, settings=self.settings)

        self._initialized = True
        logger.info(
            "Service container initialized",
            provider=self.settings.reasoning.provider,
            default_model=self.settings.reasoning.default_model,
        )

    def client_for(self, provider: str) -> ReasoningClient:
        """Get (or build) the reasoning client for a provider."""
        provider = provider.lower()
        if provider not in self._clients:
            self._clients[provider] = create_reasoning_client(self.settings, provider)
        return self._clients[provider]

    @property
    def is_initialized(self) -> bool:
        """Whether the reasoning client and radar service have been built."""
        return self._initialized

    @property
    def radar_service(self) -> RadarService:
        """Get the radar service."""
        self.initialize()
        return self._radar_service

    async def close(self) -> None:
        """Close every reasoning client."""
        for client in self._clients.values():
            await client.close()
        self._clients.clear()
        self._initialized = False


# Singleton container instance
container = ServiceContainer.get_instance()


# Dependency functions for FastAPI
def get_radar_service() -> RadarService:
    """Get the radar service instance."""
    return container.radar_service


def get_client_factory() -> Callable[[str], ReasoningClient]:
    """Get a provider -> reasoning client lookup."""
    return container.client_for
