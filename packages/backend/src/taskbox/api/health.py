"""Health check endpoint."""

from fastapi import APIRouter

from taskbox import __version__

router = APIRouter()


@router.get("/health")
async def health_check():
    """Liveness only: the store and identity provider are not probed."""
    return {"status": "ok", "version": __version__}
