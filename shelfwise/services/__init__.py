"""Services package."""

from shelfwise.services.gemini import (
    GeminiClient,
    GeminiNotConfiguredError,
    GeminiResponseError,
)
from shelfwise.services.pantry_extraction import (
    ImageTooLargeError,
    InvalidImageError,
    extract_pantry_items,
)
from shelfwise.services.recipe_generation import (
    EmptyPantryError,
    generate_recipes,
)
from shelfwise.services.reminder_checker import (
    ReminderPermissionError,
    check_reminder_permission,
    run_reminder_sweep,
    send_pantry_reminders_task,
)
from shelfwise.services.reminder_engine import (
    build_notification,
    evaluate_user,
)
from shelfwise.services.reminder_sweep import (
    InventoryReader,
    Notifier,
    TokenReader,
    sweep,
)

__all__ = [
    "EmptyPantryError",
    "GeminiClient",
    "GeminiNotConfiguredError",
    "GeminiResponseError",
    "ImageTooLargeError",
    "InvalidImageError",
    "InventoryReader",
    "Notifier",
    "ReminderPermissionError",
    "TokenReader",
    "build_notification",
    "check_reminder_permission",
    "evaluate_user",
    "extract_pantry_items",
    "generate_recipes",
    "run_reminder_sweep",
    "send_pantry_reminders_task",
    "sweep",
]
