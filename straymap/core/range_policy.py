"""
Roaming range policy.

Maps an animal type tag to the maximum distance, in meters, that sightings
of a single animal of that type may lie from each other.
"""

import logging
import math
from types import MappingProxyType
from typing import Mapping

from straymap.core.config import settings
from straymap.core.exceptions import RangePolicyError
from straymap.schemas.sighting import OTHER_ANIMAL_TYPE, normalize_animal_type

logger = logging.getLogger(__name__)


class RangePolicy:
    """
    Read-only table of maximum roaming ranges per animal type.

    Unknown animal types fall back to the "other" entry, which must exist.
    """

    def __init__(self, ranges: Mapping[str, float]):
        """
        Validate and freeze the range table.

        Raises:
            RangePolicyError: If "other" is missing, a type is listed twice or a
                range is not a positive number
        """
        table = {}
        for animal_type, max_range in ranges.items():
            key = normalize_animal_type(animal_type)
            if key in table:
                raise RangePolicyError(
                    f"Roaming range for '{key}' is defined more than once: {animal_type!r}"
                )
            try:
                value = float(max_range)
            except (TypeError, ValueError) as e:
                raise RangePolicyError(
                    f"Roaming range for '{key}' is not a number: {max_range!r}"
                ) from e
            if not math.isfinite(value) or value <= 0:
                raise RangePolicyError(
                    f"Roaming range for '{key}' must be a positive number of meters, got {value}"
                )
            table[key] = value

        if OTHER_ANIMAL_TYPE not in table:
            raise RangePolicyError(
                f"Roaming range table must define a '{OTHER_ANIMAL_TYPE}' fallback entry"
            )

        self._ranges = MappingProxyType(table)

    @property
    def ranges(self) -> Mapping[str, float]:
        return self._ranges

    def max_range(self, animal_type: str) -> float:
        """Maximum roaming range in meters, falling back to "other"."""
        return self._ranges.get(
            normalize_animal_type(animal_type), self._ranges[OTHER_ANIMAL_TYPE]
        )

    def max_range_km(self, animal_type: str) -> float:
        return self.max_range(animal_type) / 1000.0


range_policy = RangePolicy(settings.ROAMING_RANGES)
logger.debug("Loaded roaming ranges: %s", dict(range_policy.ranges))
