"""Schemas for recipe suggestions."""

import typing as t

from pydantic import Field, field_validator

from shelfwise.core.globals import UNTITLED_RECIPE
from shelfwise.schemas.reminder import CamelModel


def _string_list(value: t.Any) -> t.List[str]:
    if not isinstance(value, list):
        return []
    return [str(entry) for entry in value]


class Recipe(CamelModel):
    """Recipe suggested from the pantry contents."""

    title: str = UNTITLED_RECIPE
    ingredients: t.List[str] = Field(default_factory=list)
    steps: t.List[str] = Field(default_factory=list)
    rationale: str = ""
    uses_expiring: t.List[str] = Field(default_factory=list)

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: t.Any) -> str:
        """Fall back to a placeholder title."""
        return v if isinstance(v, str) else UNTITLED_RECIPE

    @field_validator("rationale", mode="before")
    @classmethod
    def validate_rationale(cls, v: t.Any) -> str:
        """Non-string rationales become empty."""
        return v if isinstance(v, str) else ""

    @field_validator("ingredients", "steps", "uses_expiring", mode="before")
    @classmethod
    def validate_string_lists(cls, v: t.Any) -> t.List[str]:
        """Stringify list entries, non-lists become empty."""
        return _string_list(v)


class RecipeRequest(CamelModel):
    """Request for recipe suggestions."""

    pantry_items: t.List[t.Any] = Field(default_factory=list)


class RecipeResponse(CamelModel):
    """Suggested recipes."""

    recipes: t.List[Recipe] = Field(default_factory=list)
