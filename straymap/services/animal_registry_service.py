"""
Animal Registry Service

Client for the external animal registry API, which stores animal records.
The territory engine never stores anything itself; finalized territories
are handed off here.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from straymap.core.config import settings
from straymap.schemas.animal import AnimalRecord
from straymap.schemas.health import ServiceHealth

logger = logging.getLogger(__name__)


class AnimalRegistryError(Exception):
    """Base exception for animal registry errors."""


class AnimalRegistryAPIError(AnimalRegistryError):
    """Raised when the registry API returns an error status."""


class AnimalRegistryNetworkError(AnimalRegistryError):
    """Raised when network communication fails."""


class AnimalRegistryDataError(AnimalRegistryError):
    """Raised when the registry response cannot be parsed."""


class AnimalRegistryService:
    """
    Service for interacting with the animal registry API.
    """

    def __init__(self):
        """
        Initialize the animal registry service with configuration.
        """
        self._api_url = settings.ANIMAL_REGISTRY_API_URL
        self._timeout = settings.ANIMAL_REGISTRY_TIMEOUT
        self._client: Optional[httpx.AsyncClient] = None

    def _get_client(self) -> httpx.AsyncClient:
        """
        Get or create the HTTP client for the animal registry API.

        Returns:
            httpx.AsyncClient instance for making requests to the registry.
        """
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._api_url, timeout=self._timeout)
        return self._client

    async def health_check(self) -> ServiceHealth:
        """
        Perform a health check of the animal registry

        Returns:
            ServiceHealth indicating the health status of the registry.
        """
        try:
            client = self._get_client()
            response = await client.get("/get/all")

            if response.status_code == 200:
                return ServiceHealth(
                    healthy=True,
                    message="Animal registry API is responding",
                )
            return ServiceHealth(
                healthy=False,
                message=f"Animal registry API returned status code: {response.status_code}",
            )

        except httpx.TimeoutException:
            return ServiceHealth(
                healthy=False,
                message="Animal registry API request timed out",
            )
        except Exception as e:  # pylint: disable=broad-except
            return ServiceHealth(
                healthy=False,
                message=f"Animal registry API check failed: {str(e)}",
            )

    async def add_animal(self, record: AnimalRecord) -> Dict[str, Any]:
        """
        Store an animal record with its territory in the registry.

        Args:
            record: Animal metadata together with territory center and radius

        Returns:
            The stored record as returned by the registry

        Raises:
            AnimalRegistryAPIError: If the registry returns a non-2xx status
            AnimalRegistryNetworkError: If the registry cannot be reached
            AnimalRegistryDataError: If the response is not a JSON object
        """
        try:
            client = self._get_client()
            response = await client.post(
                "/add-animal", json=record.model_dump(mode="json", by_alias=True)
            )
        except httpx.TimeoutException as e:
            logger.error("Request to animal registry timed out")
            raise AnimalRegistryNetworkError("Request timed out") from e
        except httpx.HTTPError as e:
            logger.error("Network error while contacting animal registry: %s", str(e))
            raise AnimalRegistryNetworkError(f"Network error: {str(e)}") from e

        if not response.is_success:
            logger.error("Animal registry returned status %s", response.status_code)
            raise AnimalRegistryAPIError(
                f"Animal registry returned status {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.error("Failed to parse animal registry response: %s", str(e))
            raise AnimalRegistryDataError(f"Invalid response data: {str(e)}") from e

        if not isinstance(data, dict):
            logger.error("Animal registry returned unexpected payload: %r", data)
            raise AnimalRegistryDataError("Expected a JSON object in registry response")

        logger.info("Stored animal %s in registry", data.get("id"))
        return data


# Singleton instance for dependency injection
animal_registry_service = AnimalRegistryService()
