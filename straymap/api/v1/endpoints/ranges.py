from typing import List

from fastapi import APIRouter

from straymap.schemas.sighting import normalize_animal_type
from straymap.schemas.territory import RoamingRange
from straymap.services.territory_service import territory_service

router = APIRouter()


def _roaming_range(animal_type: str) -> RoamingRange:
    policy = territory_service.policy
    return RoamingRange(
        animal_type=animal_type,
        max_range_meters=policy.max_range(animal_type),
        max_range_km=policy.max_range_km(animal_type),
    )


@router.get("", response_model=List[RoamingRange])
async def list_ranges() -> List[RoamingRange]:
    """
    List the maximum roaming range of every configured animal type.
    """
    return [_roaming_range(animal_type) for animal_type in territory_service.policy.ranges]


@router.get("/{animal_type}", response_model=RoamingRange)
async def get_range(animal_type: str) -> RoamingRange:
    """
    Get the maximum roaming range for an animal type.

    Unknown animal types get the range configured for "other".
    """
    return _roaming_range(normalize_animal_type(animal_type))
