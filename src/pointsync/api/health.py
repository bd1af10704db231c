"""Health check endpoint.

Learn: Reports that the server is up along with the hub's current
size, read through the same locked accessors the sessions use.
"""

from fastapi import APIRouter, Depends

from pointsync import __version__
from pointsync.hub.state import Hub, get_hub

router = APIRouter()


@router.get("/health")
async def health_check(hub: Hub = Depends(get_hub)):
    """Server status plus point and connection counts."""
    return {
        "status": "ok",
        "version": __version__,
        "points": len(hub.points),
        "connections": len(hub.connections),
        "startTime": hub.start_time,
    }
