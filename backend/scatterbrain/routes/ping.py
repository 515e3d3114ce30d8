"""
ScatterBrain Backend - Ping Route
=================================

What:  Basic availability probe. Touches no dependency and always answers
       with the same payload.
"""

from fastapi import APIRouter

from scatterbrain.schemas.thought import PingResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/ping",
    response_model=PingResponse,
    summary="Liveness probe",
)
async def ping() -> PingResponse:
    return PingResponse()
