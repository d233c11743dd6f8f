"""Schemas package."""

from shelfwise.schemas.pantry import (
    DetectedItem,
    ExtractionResult,
    ExtractItemsRequest,
)
from shelfwise.schemas.recipe import Recipe, RecipeRequest, RecipeResponse
from shelfwise.schemas.reminder import (
    DispatchResult,
    NotificationPayload,
    PantryItemSnapshot,
    ReminderDecision,
    SweepResult,
    UserConfig,
    UserProfile,
)

__all__ = [
    "DetectedItem",
    "DispatchResult",
    "ExtractItemsRequest",
    "ExtractionResult",
    "NotificationPayload",
    "PantryItemSnapshot",
    "Recipe",
    "RecipeRequest",
    "RecipeResponse",
    "ReminderDecision",
    "SweepResult",
    "UserConfig",
    "UserProfile",
]
