from fastapi import APIRouter, HTTPException, status

from straymap.schemas.sighting import SightingSession
from straymap.schemas.territory import (
    SessionMoveRequest,
    SessionPreview,
    SessionSightingRequest,
    SessionUpdate,
)
from straymap.services.session_service import SessionIndexError, session_service

router = APIRouter()


@router.post("/sightings", response_model=SessionUpdate)
async def add_sighting(request: SessionSightingRequest) -> SessionUpdate:
    """
    Add a sighting to a session if it lies within roaming range.
    """
    return session_service.add_sighting(request.session, request.sighting)


@router.put("/sightings/{index}", response_model=SessionUpdate)
async def move_sighting(index: int, request: SessionMoveRequest) -> SessionUpdate:
    """
    Move a sighting of a session to new coordinates.
    """
    try:
        return session_service.move_sighting(
            request.session, index, request.coordinates, request.observed_at
        )
    except SessionIndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.delete("/sightings/{index}", response_model=SightingSession)
async def remove_sighting(index: int, session: SightingSession) -> SightingSession:
    """
    Remove a sighting from a session.
    """
    try:
        return session_service.remove_sighting(session, index)
    except SessionIndexError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e


@router.post("/preview", response_model=SessionPreview)
async def preview_territory(session: SightingSession) -> SessionPreview:
    """
    Preview the territory of a session once it has enough sightings.
    """
    return session_service.preview_territory(session)
