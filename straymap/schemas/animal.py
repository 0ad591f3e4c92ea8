from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from straymap.core.config import settings
from straymap.schemas.geo import Territory
from straymap.schemas.sighting import OTHER_ANIMAL_TYPE, Sighting, normalize_animal_type


class AnimalBase(BaseModel):
    """Descriptive metadata for a stray animal. Opaque to the territory engine."""

    animal_name: Optional[str] = None
    animal_type: str = OTHER_ANIMAL_TYPE
    breed: Optional[str] = None
    color: Optional[str] = None
    size: Optional[str] = None
    health_status: Optional[str] = None
    incident: Optional[str] = None
    color_code: Optional[str] = None

    @field_validator("animal_type")
    @classmethod
    def validate_animal_type(cls, v: str) -> str:
        return normalize_animal_type(v)


class AnimalCreate(AnimalBase):
    """An animal together with the sightings its territory is inferred from."""

    sightings: List[Sighting] = Field(..., min_length=settings.MIN_TERRITORY_SIGHTINGS)


class AnimalRecord(AnimalBase):
    """
    Record handed to the animal registry for storage.

    Serialized with camelCase keys, which is what the registry API expects.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    last_seen: date
    latitude: float
    longitude: float
    radius: float


class AnimalResponse(AnimalBase):
    """Response schema for a stored animal."""

    id: Optional[Any] = None
    last_seen: date
    territory: Territory
    accepted_sightings: List[Sighting]
    discarded_sightings: List[Sighting]
    registry_record: Dict[str, Any] = Field(
        default_factory=dict, description="Record as returned by the animal registry"
    )
