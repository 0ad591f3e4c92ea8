"""
Territory Request/Response Schemas

Pydantic models for the territory estimation and sighting session API
endpoints.
"""

from datetime import date
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from straymap.core.config import settings
from straymap.schemas.geo import Coordinates, Territory
from straymap.schemas.sighting import (
    OTHER_ANIMAL_TYPE,
    Sighting,
    SightingSession,
    normalize_animal_type,
)


class AnimalTypeRequest(BaseModel):
    """Base for requests scoped to one animal type."""

    animal_type: str = Field(default=OTHER_ANIMAL_TYPE, description="Animal type tag, e.g. dog")

    @field_validator("animal_type")
    @classmethod
    def validate_animal_type(cls, v: str) -> str:
        return normalize_animal_type(v)


class RoamingRange(BaseModel):
    """Maximum roaming range for an animal type."""

    animal_type: str
    max_range_meters: float
    max_range_km: float


class TerritoryEstimate(BaseModel):
    """Outcome of running the territory pipeline over a set of sightings."""

    accepted: bool = Field(..., description="Whether enough sightings survived filtering")
    animal_type: str
    max_range_meters: float
    accepted_sightings: List[Sighting]
    discarded_sightings: List[Sighting]
    territory: Optional[Territory] = None


class AdmissibilityRequest(AnimalTypeRequest):
    """Request schema for checking a candidate sighting."""

    candidate: Sighting
    accepted: List[Sighting] = Field(
        default_factory=list, description="Sightings already accepted for this animal"
    )


class AdmissibilityResponse(BaseModel):
    """Response schema for checking a candidate sighting."""

    admissible: bool
    animal_type: str
    max_range_meters: float
    distance_meters: Optional[float] = Field(
        None, description="Distance from the accepted sightings' center, if any exist"
    )
    message: Optional[str] = None


class FilterRequest(AnimalTypeRequest):
    """Request schema for filtering a list of sightings."""

    sightings: List[Sighting]


class FilterResponse(BaseModel):
    """Response schema for filtering a list of sightings."""

    animal_type: str
    max_range_meters: float
    accepted_sightings: List[Sighting]
    discarded_sightings: List[Sighting]
    enough_sightings: bool = Field(
        ..., description="Whether enough sightings remain to estimate a territory"
    )


class TerritoryRequest(AnimalTypeRequest):
    """Request schema for estimating a territory."""

    sightings: List[Sighting] = Field(..., min_length=settings.MIN_TERRITORY_SIGHTINGS)


class TerritoryResponse(TerritoryEstimate):
    """Response schema for estimating a territory."""

    message: Optional[str] = None


class SessionSightingRequest(BaseModel):
    """Request schema for adding a sighting to a session."""

    session: SightingSession
    sighting: Sighting


class SessionMoveRequest(BaseModel):
    """Request schema for moving an existing sighting of a session."""

    session: SightingSession
    coordinates: Coordinates
    observed_at: Optional[date] = Field(
        None, description="New observation date. Keeps the original date if omitted."
    )


class SessionUpdate(BaseModel):
    """Outcome of a session operation that may be rejected."""

    accepted: bool
    session: SightingSession
    max_range_meters: float
    distance_meters: Optional[float] = None
    message: Optional[str] = None


class SessionPreview(BaseModel):
    """Territory preview for an in-progress session."""

    session: SightingSession
    sightings_needed: int = Field(..., description="Sightings still missing for a territory")
    discarded_sightings: List[Sighting] = Field(
        default_factory=list, description="Sightings outside roaming range of the others"
    )
    territory: Optional[Territory] = None
