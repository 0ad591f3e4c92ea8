from fastapi import APIRouter

from straymap.api.v1.endpoints import animals, health, ranges, sessions, territories

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(ranges.router, prefix="/ranges", tags=["ranges"])
api_router.include_router(territories.router, prefix="/territories", tags=["territories"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
api_router.include_router(animals.router, prefix="/animals", tags=["animals"])
