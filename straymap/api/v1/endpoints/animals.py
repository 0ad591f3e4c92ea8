"""
Animals API Endpoint

Finalizes an animal: estimates its territory from the reported sightings
and hands the result to the animal registry for storage.
"""

import logging

from fastapi import APIRouter, HTTPException

from straymap.schemas.animal import AnimalBase, AnimalCreate, AnimalRecord, AnimalResponse
from straymap.services.animal_registry_service import (
    AnimalRegistryAPIError,
    AnimalRegistryDataError,
    AnimalRegistryError,
    AnimalRegistryNetworkError,
    animal_registry_service,
)
from straymap.services.territory_service import territory_service
from straymap.utils.messages import TERRITORY_REJECTED_MESSAGE

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=AnimalResponse, status_code=201)
async def create_animal(animal_in: AnimalCreate) -> AnimalResponse:
    """
    Estimate the territory of a new animal and store it in the registry.

    Args:
        animal_in: Animal metadata and at least three sightings

    Returns:
        AnimalResponse with the territory and the registry's stored record

    Raises:
        HTTPException: 422 if too few sightings lie within roaming range,
            502/503 if the registry fails
    """
    estimate = territory_service.build_territory(animal_in.sightings, animal_in.animal_type)

    if not estimate.accepted or estimate.territory is None:
        raise HTTPException(
            status_code=422,
            detail=TERRITORY_REJECTED_MESSAGE,
        )

    metadata = animal_in.model_dump(include=set(AnimalBase.model_fields))
    last_seen = max(s.observed_at for s in estimate.accepted_sightings)
    record = AnimalRecord(
        **metadata,
        last_seen=last_seen,
        latitude=estimate.territory.center.latitude,
        longitude=estimate.territory.center.longitude,
        radius=estimate.territory.radius_meters,
    )

    try:
        stored = await animal_registry_service.add_animal(record)

    except AnimalRegistryAPIError as e:
        logger.error("Animal registry API error: %s", str(e))
        raise HTTPException(
            status_code=502,
            detail=f"Animal registry error: {str(e)}",
        ) from e

    except AnimalRegistryNetworkError as e:
        logger.error("Network error: %s", str(e))
        raise HTTPException(
            status_code=503,
            detail=f"Network error connecting to animal registry: {str(e)}",
        ) from e

    except AnimalRegistryDataError as e:
        logger.error("Data parsing error: %s", str(e))
        raise HTTPException(
            status_code=502,
            detail=f"Failed to parse animal registry response: {str(e)}",
        ) from e

    except AnimalRegistryError as e:
        logger.error("Animal registry error: %s", str(e))
        raise HTTPException(
            status_code=500,
            detail=f"Animal registry error: {str(e)}",
        ) from e

    return AnimalResponse(
        **metadata,
        id=stored.get("id"),
        last_seen=last_seen,
        territory=estimate.territory,
        accepted_sightings=estimate.accepted_sightings,
        discarded_sightings=estimate.discarded_sightings,
        registry_record=stored,
    )
