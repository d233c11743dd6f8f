"""API routes package."""

from fastapi import APIRouter

from shelfwise.routers.api import ai, reminders

# Create main API router with /api prefix
ROUTER = APIRouter(prefix="/api")

# Include all sub-routers
ROUTER.include_router(ai.ROUTER)
ROUTER.include_router(reminders.ROUTER)

__all__ = [
    "ai",
    "reminders",
    "ROUTER",
]
