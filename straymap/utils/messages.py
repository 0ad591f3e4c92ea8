"""User-facing messages for rejected sightings and territories."""


def sighting_too_far_message(animal_type: str, max_range_meters: float) -> str:
    return (
        "This location is too far from other sightings. "
        f"Maximum range for {animal_type} is {max_range_meters / 1000:.1f} km."
    )


TERRITORY_REJECTED_MESSAGE = (
    "Some sightings were too far apart for this type of animal. "
    "Please add sightings closer together."
)
