"""
Session service for building up the sightings of one animal.

A SightingSession is owned by the caller and passed in by value. Every
operation returns a new session (or an outcome wrapping one) and leaves the
given session untouched.
"""

from datetime import date
from typing import Optional

from straymap.schemas.geo import Coordinates
from straymap.schemas.sighting import Sighting, SightingSession
from straymap.schemas.territory import SessionPreview, SessionUpdate
from straymap.services.territory_service import TerritoryService, territory_service
from straymap.utils.messages import sighting_too_far_message


class SessionIndexError(IndexError):
    """Raised when a session operation refers to a sighting that does not exist."""


class SessionService:
    """Service for handling sighting session operations."""

    def __init__(self, territories: TerritoryService = territory_service):
        self._territories = territories

    def _check_index(self, session: SightingSession, index: int) -> None:
        if not 0 <= index < len(session.sightings):
            raise SessionIndexError(
                f"Sighting {index} does not exist, session has {len(session.sightings)}"
            )

    def add_sighting(self, session: SightingSession, sighting: Sighting) -> SessionUpdate:
        """
        Add a sighting if it lies within range of the sightings already accepted.

        Args:
            session: Current session
            sighting: Sighting to add

        Returns:
            SessionUpdate with the extended session, or the unchanged session
            and a rejection message
        """
        max_range = self._territories.max_range(session.animal_type)
        admissible, spread = self._territories.check_admission(
            sighting, session.sightings, session.animal_type
        )

        if not admissible:
            return SessionUpdate(
                accepted=False,
                session=session,
                max_range_meters=max_range,
                distance_meters=spread,
                message=sighting_too_far_message(session.animal_type, max_range),
            )

        return SessionUpdate(
            accepted=True,
            session=session.model_copy(update={"sightings": [*session.sightings, sighting]}),
            max_range_meters=max_range,
            distance_meters=spread,
        )

    def move_sighting(
        self,
        session: SightingSession,
        index: int,
        coordinates: Coordinates,
        observed_at: Optional[date] = None,
    ) -> SessionUpdate:
        """
        Move an existing sighting to new coordinates.

        The moved sighting is checked against all other sightings of the
        session. It keeps its observation date unless a new one is given.

        Raises:
            SessionIndexError: If index does not refer to a sighting of the session
        """
        self._check_index(session, index)

        original = session.sightings[index]
        moved = Sighting(
            coordinates=coordinates,
            observed_at=observed_at or original.observed_at,
        )
        others = [s for i, s in enumerate(session.sightings) if i != index]
        max_range = self._territories.max_range(session.animal_type)
        admissible, spread = self._territories.check_admission(
            moved, others, session.animal_type
        )

        if not admissible:
            return SessionUpdate(
                accepted=False,
                session=session,
                max_range_meters=max_range,
                distance_meters=spread,
                message=sighting_too_far_message(session.animal_type, max_range),
            )

        sightings = list(session.sightings)
        sightings[index] = moved
        return SessionUpdate(
            accepted=True,
            session=session.model_copy(update={"sightings": sightings}),
            max_range_meters=max_range,
            distance_meters=spread,
        )

    def remove_sighting(self, session: SightingSession, index: int) -> SightingSession:
        """
        Remove a sighting from the session.

        Raises:
            SessionIndexError: If index does not refer to a sighting of the session
        """
        self._check_index(session, index)
        sightings = [s for i, s in enumerate(session.sightings) if i != index]
        return session.model_copy(update={"sightings": sightings})

    def preview_territory(self, session: SightingSession) -> SessionPreview:
        """
        Territory of the session's sightings as they stand, once there are enough.

        The session arrives from the caller, so its sightings go through the
        same range filter as a final estimate. Sightings outside range are
        reported as discarded and do not count towards the minimum.
        """
        estimate = self._territories.build_territory(session.sightings, session.animal_type)
        needed = max(self._territories.min_sightings - len(estimate.accepted_sightings), 0)
        return SessionPreview(
            session=session,
            sightings_needed=needed,
            discarded_sightings=estimate.discarded_sightings,
            territory=estimate.territory,
        )


# Singleton instance for dependency injection
session_service = SessionService()
