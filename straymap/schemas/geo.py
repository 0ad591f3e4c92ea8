"""
Location and Coordinate Type Definitions

Pydantic models for representing geographic coordinates and the territory
inferred for an animal from its sightings.
"""

from pydantic import BaseModel, ConfigDict, Field


class Coordinates(BaseModel):
    """
    Geographic coordinates (latitude and longitude).

    Coordinates are validated here, at the boundary. The territory engine
    assumes every Coordinates instance it receives is well-formed.
    """

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(
        ..., ge=-90.0, le=90.0, allow_inf_nan=False, description="Latitude in decimal degrees"
    )
    longitude: float = Field(
        ..., ge=-180.0, le=180.0, allow_inf_nan=False, description="Longitude in decimal degrees"
    )

    def __str__(self) -> str:
        return f"({self.latitude}, {self.longitude})"


class Territory(BaseModel):
    """The inferred roaming area of an animal."""

    model_config = ConfigDict(frozen=True)

    center: Coordinates
    radius_meters: float = Field(..., gt=0, description="Roaming radius in meters")
