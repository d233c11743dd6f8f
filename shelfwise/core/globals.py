"""Global variables."""

import typing as t

OPENAPI_TAGS = [
    {
        "name": "AI",
        "description": (
            "Pantry photo extraction and recipe suggestions"
            " powered by Gemini"
        ),
    },
    {
        "name": "Reminders",
        "description": "On-demand pantry reminder sweeps",
    },
    {
        "name": "Health",
        "description": "Application health check endpoints",
    },
]

QUANTITY_UNITS: t.FrozenSet[str] = frozenset(
    {"pcs", "g", "kg", "ml", "l", "pack", "bottle", "can", "box", "other"}
)
DEFAULT_CATEGORY: str = "Other"
UNTITLED_RECIPE: str = "Untitled Recipe"
MAX_SUGGESTED_RECIPES: int = 3

REMINDER_TITLE: str = "Pantry reminder"
REMINDER_CLAUSE_SEPARATOR: str = " | "
REMINDER_MAX_LISTED_NAMES: int = 3

GEMINI_ENDPOINT: str = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

HEIF_MIME_TYPES: t.FrozenSet[str] = frozenset({"image/heic", "image/heif"})
