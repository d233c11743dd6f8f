"""Recipe suggestions from the pantry contents."""

import json
import logging
import typing as t

from shelfwise.core.globals import MAX_SUGGESTED_RECIPES
from shelfwise.schemas.recipe import Recipe
from shelfwise.services.gemini import GeminiClient

LOGGER = logging.getLogger(__name__)


class EmptyPantryError(Exception):
    """Raised when recipes are requested for an empty pantry."""

    def __init__(self) -> None:
        super().__init__("pantryItems is required.")


def build_recipe_prompt(pantry_items: t.Sequence[t.Any]) -> str:
    """Build the recipe prompt for the given pantry items.

    Args:
        pantry_items (t.Sequence[t.Any]): Pantry items as sent by the app.

    Returns:
        str: The prompt.
    """
    return "\n".join(
        [
            "You are a cooking assistant.",
            "Given pantry items JSON, suggest up to"
            f" {MAX_SUGGESTED_RECIPES} recipes prioritizing"
            " near-expiry ingredients.",
            "Return STRICT JSON only in this format:",
            '{ "recipes": [{ "title": string, "ingredients": string[],'
            ' "steps": string[], "rationale": string,'
            ' "usesExpiring": string[] }] }',
            f"Pantry items: {json.dumps(list(pantry_items), default=str)}",
            "Do not include markdown.",
        ]
    )


def parse_recipes(data: t.Any) -> t.List[Recipe]:
    """Read recipes from the model's answer, defaulting missing fields.

    Args:
        data (t.Any): Decoded model output.

    Returns:
        t.List[Recipe]: The recipes; entries that are not objects are skipped.
    """
    raw_recipes: t.Any = data.get("recipes") if isinstance(data, dict) else None
    if not isinstance(raw_recipes, list):
        return []
    return [
        Recipe.model_validate(raw)
        for raw in raw_recipes
        if isinstance(raw, dict)
    ]


async def generate_recipes(
    client: GeminiClient, pantry_items: t.Sequence[t.Any]
) -> t.List[Recipe]:
    """Suggest recipes for a pantry.

    Args:
        client (GeminiClient): The Gemini client.
        pantry_items (t.Sequence[t.Any]): The pantry inventory.

    Returns:
        t.List[Recipe]: Suggested recipes.
    """
    if not pantry_items:
        raise EmptyPantryError()

    data: t.Any = await client.generate_json(build_recipe_prompt(pantry_items))
    recipes: t.List[Recipe] = parse_recipes(data)
    LOGGER.info(
        "Suggested %d recipe(s) for %d pantry item(s)",
        len(recipes),
        len(pantry_items),
    )
    return recipes
