"""
Territory Service

Turns independently reported sightings of one animal into a territory: a
center point and a roaming radius bounded by the animal type's maximum
roaming range.

All operations are pure functions of their arguments. The service holds
only the read-only range policy and tuning constants.
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from straymap.core.config import settings
from straymap.core.exceptions import TerritoryConfigError
from straymap.core.geo import distance, mean_coordinates
from straymap.core.range_policy import RangePolicy, range_policy
from straymap.schemas.geo import Coordinates, Territory
from straymap.schemas.sighting import Sighting, normalize_animal_type
from straymap.schemas.territory import TerritoryEstimate

logger = logging.getLogger(__name__)

# A center and radius from fewer points is not a meaningful area
MIN_TERRITORY_SIZE = 3


class TerritoryService:
    """
    Territory estimation engine.

    The buffer factor and the single-pass filter are tunable defaults rather
    than fixed rules.
    """

    def __init__(
        self,
        policy: RangePolicy = range_policy,
        buffer_factor: float = settings.RADIUS_BUFFER_FACTOR,
        min_radius_meters: float = settings.MIN_TERRITORY_RADIUS_METERS,
        min_sightings: int = settings.MIN_TERRITORY_SIGHTINGS,
    ):
        """
        Validate the tuning constants.

        Raises:
            TerritoryConfigError: If min_sightings is below 3, buffer_factor is
                below 1 or min_radius_meters is not a positive number
        """
        if min_sightings < MIN_TERRITORY_SIZE:
            raise TerritoryConfigError(
                f"A territory needs at least {MIN_TERRITORY_SIZE} sightings, got {min_sightings}"
            )
        if not math.isfinite(buffer_factor) or buffer_factor < 1.0:
            raise TerritoryConfigError(
                f"Radius buffer factor must be a finite number >= 1, got {buffer_factor}"
            )
        if not math.isfinite(min_radius_meters) or min_radius_meters <= 0:
            raise TerritoryConfigError(
                f"Minimum territory radius must be a positive number of meters, "
                f"got {min_radius_meters}"
            )

        self._policy = policy
        self._buffer_factor = buffer_factor
        self._min_radius_meters = min_radius_meters
        self._min_sightings = min_sightings

    @property
    def policy(self) -> RangePolicy:
        return self._policy

    @property
    def min_sightings(self) -> int:
        return self._min_sightings

    def max_range(self, animal_type: str) -> float:
        return self._policy.max_range(animal_type)

    def centroid(self, sightings: Sequence[Sighting]) -> Coordinates:
        """
        Geometric center of a set of sightings.

        Raises:
            EmptySightingsError: If sightings is empty
        """
        return mean_coordinates(sighting.coordinates for sighting in sightings)

    def distance_from_center(
        self, candidate: Sighting, accepted: Sequence[Sighting]
    ) -> Optional[float]:
        """Distance in meters from the center of accepted to candidate, None if accepted is empty."""
        if not accepted:
            return None
        return distance(self.centroid(accepted), candidate.coordinates)

    def check_admission(
        self, candidate: Sighting, accepted: Sequence[Sighting], animal_type: str
    ) -> Tuple[bool, Optional[float]]:
        """
        Check whether a candidate sighting fits with those already accepted.

        With no accepted sightings every candidate is admissible. With one,
        the center is that sighting, so this is a plain pairwise check.

        Args:
            candidate: Sighting about to be added or moved
            accepted: Sightings already accepted for the animal
            animal_type: Animal type tag used to look up the roaming range

        Returns:
            Whether the candidate lies within the roaming range of the
            accepted sightings' center, and its distance from that center
            (None if nothing is accepted yet)
        """
        spread = self.distance_from_center(candidate, accepted)
        if spread is None:
            return True, None

        max_range = self.max_range(animal_type)
        if spread > max_range:
            logger.debug(
                "Sighting %s rejected: %.1f m from center exceeds %.1f m for '%s'",
                candidate.coordinates,
                spread,
                max_range,
                animal_type,
            )
            return False, spread
        return True, spread

    def is_admissible(
        self, candidate: Sighting, accepted: Sequence[Sighting], animal_type: str
    ) -> bool:
        admissible, _ = self.check_admission(candidate, accepted, animal_type)
        return admissible

    def filter_within_range(
        self, sightings: Sequence[Sighting], animal_type: str
    ) -> List[Sighting]:
        """
        Keep the sightings that lie within roaming range of the group's center.

        The center is computed once over all sightings and each sighting is
        tested against it, so a minority of outliers is dropped without
        iterating. Order is preserved. The result may contain fewer sightings
        than a territory needs; callers check its length.
        """
        kept, _ = self.split_by_range(sightings, animal_type)
        return kept

    def split_by_range(
        self, sightings: Sequence[Sighting], animal_type: str
    ) -> Tuple[List[Sighting], List[Sighting]]:
        """Split sightings into those within range of their center and the rest."""
        kept: List[Sighting] = []
        dropped: List[Sighting] = []
        if not sightings:
            return kept, dropped

        center = self.centroid(sightings)
        max_range = self.max_range(animal_type)
        for sighting in sightings:
            if distance(center, sighting.coordinates) <= max_range:
                kept.append(sighting)
            else:
                dropped.append(sighting)

        if dropped:
            logger.debug(
                "Dropped %d of %d sightings outside %.1f m for '%s'",
                len(dropped),
                len(sightings),
                max_range,
                animal_type,
            )
        return kept, dropped

    def estimate_radius(self, sightings: Sequence[Sighting], animal_type: str) -> float:
        """
        Roaming radius around the center of the sightings.

        The farthest sighting from the center, scaled by the buffer factor to
        cover roaming between sightings, floored at the minimum radius and
        capped at the animal type's maximum roaming range.

        Raises:
            EmptySightingsError: If sightings is empty
        """
        center = self.centroid(sightings)
        max_spread = max(distance(center, s.coordinates) for s in sightings)

        radius = max(max_spread * self._buffer_factor, self._min_radius_meters)
        return min(radius, self.max_range(animal_type))

    def build_territory(
        self, sightings: Sequence[Sighting], animal_type: str
    ) -> TerritoryEstimate:
        """
        Filter sightings and estimate a territory from those that remain.

        A territory is only produced when at least min_sightings sightings
        survive filtering. Otherwise the estimate is returned with
        accepted=False and no territory.
        """
        animal_type = normalize_animal_type(animal_type)
        accepted, discarded = self.split_by_range(sightings, animal_type)

        estimate = TerritoryEstimate(
            accepted=False,
            animal_type=animal_type,
            max_range_meters=self.max_range(animal_type),
            accepted_sightings=accepted,
            discarded_sightings=discarded,
        )

        if len(accepted) < self._min_sightings:
            logger.info(
                "Territory rejected for '%s': %d of %d sightings within range, %d needed",
                animal_type,
                len(accepted),
                len(sightings),
                self._min_sightings,
            )
            return estimate

        territory = Territory(
            center=self.centroid(accepted),
            radius_meters=self.estimate_radius(accepted, animal_type),
        )
        logger.info(
            "Territory for '%s' estimated at %s with radius %.1f m from %d sightings",
            animal_type,
            territory.center,
            territory.radius_meters,
            len(accepted),
        )
        return estimate.model_copy(update={"accepted": True, "territory": territory})


# Singleton instance for dependency injection
territory_service = TerritoryService()

