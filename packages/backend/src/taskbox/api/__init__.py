"""API route aggregation.

All routers registered here get mounted in main.py. Auth is applied per
route through Depends(get_current_identity) because the handlers need
the Identity itself, not just the check.
"""

from fastapi import APIRouter

from taskbox.api.health import router as health_router
from taskbox.api.tasks import router as tasks_router

api_router = APIRouter()

# Open routes — no auth required
api_router.include_router(health_router, tags=["health"])

# Every task route resolves the caller first
api_router.include_router(tasks_router, tags=["tasks"])
