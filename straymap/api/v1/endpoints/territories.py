"""
Territories API Endpoint

Provides REST API for checking sightings against roaming ranges and
estimating animal territories.
"""

import logging

from fastapi import APIRouter

from straymap.schemas.territory import (
    AdmissibilityRequest,
    AdmissibilityResponse,
    FilterRequest,
    FilterResponse,
    TerritoryRequest,
    TerritoryResponse,
)
from straymap.services.territory_service import territory_service
from straymap.utils.messages import TERRITORY_REJECTED_MESSAGE, sighting_too_far_message

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/admissibility", response_model=AdmissibilityResponse)
async def check_admissibility(request: AdmissibilityRequest) -> AdmissibilityResponse:
    """
    Check whether a candidate sighting lies within roaming range of the
    sightings already accepted for an animal.

    A rejected candidate is a normal outcome, reported with admissible=false
    and a message stating the maximum range.
    """
    max_range = territory_service.max_range(request.animal_type)
    admissible, spread = territory_service.check_admission(
        request.candidate, request.accepted, request.animal_type
    )

    return AdmissibilityResponse(
        admissible=admissible,
        animal_type=request.animal_type,
        max_range_meters=max_range,
        distance_meters=spread,
        message=None if admissible else sighting_too_far_message(request.animal_type, max_range),
    )


@router.post("/filter", response_model=FilterResponse)
async def filter_sightings(request: FilterRequest) -> FilterResponse:
    """
    Drop the sightings that lie outside roaming range of the group's center.
    """
    accepted, discarded = territory_service.split_by_range(
        request.sightings, request.animal_type
    )

    return FilterResponse(
        animal_type=request.animal_type,
        max_range_meters=territory_service.max_range(request.animal_type),
        accepted_sightings=accepted,
        discarded_sightings=discarded,
        enough_sightings=len(accepted) >= territory_service.min_sightings,
    )


@router.post("/estimate", response_model=TerritoryResponse)
async def estimate_territory(request: TerritoryRequest) -> TerritoryResponse:
    """
    Estimate the territory of an animal from its sightings.

    Sightings outside roaming range are dropped first. If too few remain,
    the response has accepted=false and no territory.
    """
    logger.info(
        "Territory estimate request: animal_type=%s, sightings=%d",
        request.animal_type,
        len(request.sightings),
    )

    estimate = territory_service.build_territory(request.sightings, request.animal_type)

    return TerritoryResponse(
        **estimate.model_dump(),
        message=None if estimate.accepted else TERRITORY_REJECTED_MESSAGE,
    )
