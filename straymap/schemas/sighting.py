"""
Sighting Schema

Pydantic models for representing reported sightings of an animal and the
in-progress session in which they are collected.
"""

from datetime import date
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator

from straymap.schemas.geo import Coordinates

OTHER_ANIMAL_TYPE = "other"


def normalize_animal_type(value: str) -> str:
    """Lowercase and strip an animal type tag; blank tags become "other"."""
    value = (value or "").strip().lower()
    return value or OTHER_ANIMAL_TYPE


class Sighting(BaseModel):
    """A single reported observation of an animal."""

    model_config = ConfigDict(frozen=True)

    coordinates: Coordinates
    observed_at: date = Field(
        default_factory=date.today, description="Date the animal was seen"
    )


class SightingSession(BaseModel):
    """
    Working state for one animal whose territory is being built.

    The session is owned by the caller and passed by value; every session
    operation returns a new session instead of changing this one.
    """

    model_config = ConfigDict(frozen=True)

    animal_type: str = Field(default=OTHER_ANIMAL_TYPE, description="Animal type tag, e.g. dog")
    sightings: List[Sighting] = Field(default_factory=list)

    @field_validator("animal_type")
    @classmethod
    def validate_animal_type(cls, v: str) -> str:
        return normalize_animal_type(v)
