"""Schemas for pantry photo extraction."""

import typing as t
from datetime import date

from pydantic import Field, field_validator

from shelfwise.core.globals import DEFAULT_CATEGORY, QUANTITY_UNITS
from shelfwise.schemas.reminder import CamelModel
from shelfwise.utils.dates import parse_utc_date
from shelfwise.utils.numbers import to_finite_number


def _clean_text(value: t.Any) -> str | None:
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


class DetectedItem(CamelModel):
    """Pantry item recognized in a photo."""

    name: str = Field(..., min_length=1)
    category: str = DEFAULT_CATEGORY
    expiry_date_iso: date = Field(..., alias="expiryDateISO")
    quantity_value: float | None = None
    quantity_unit: str | None = None
    quantity_note: str | None = None
    confidence: float = Field(0.0, ge=0.0, le=1.0)

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: t.Any) -> str:
        """Trim the name; non-strings become empty and fail validation."""
        return _clean_text(v) or ""

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v: t.Any) -> str:
        """Trim the category, defaulting to the catch-all one."""
        return _clean_text(v) or DEFAULT_CATEGORY

    @field_validator("expiry_date_iso", mode="before")
    @classmethod
    def validate_expiry_date(cls, v: t.Any) -> date | None:
        """Parse the expiry as a UTC calendar date."""
        return parse_utc_date(v)

    @field_validator("quantity_value", mode="before")
    @classmethod
    def validate_quantity_value(cls, v: t.Any) -> float | None:
        """Keep finite numbers only."""
        return to_finite_number(v)

    @field_validator("quantity_unit", mode="before")
    @classmethod
    def validate_quantity_unit(cls, v: t.Any) -> str | None:
        """Lower-case known units, map unknown ones to ``other``."""
        unit: str | None = _clean_text(v)
        if unit is None:
            return None
        unit = unit.lower()
        return unit if unit in QUANTITY_UNITS else "other"

    @field_validator("quantity_note", mode="before")
    @classmethod
    def validate_quantity_note(cls, v: t.Any) -> str | None:
        """Trim the note, dropping blanks."""
        return _clean_text(v)

    @field_validator("confidence", mode="before")
    @classmethod
    def validate_confidence(cls, v: t.Any) -> float:
        """Clamp the confidence into ``[0, 1]``."""
        number: float | None = to_finite_number(v)
        if number is None:
            return 0.0
        return max(0.0, min(1.0, number))


class ExtractItemsRequest(CamelModel):
    """Request to extract pantry items from a photo."""

    image_base64: str = Field(..., min_length=1)
    mime_type: str | None = None

    @field_validator("image_base64")
    @classmethod
    def validate_image(cls, v: str) -> str:
        """Reject blank image payloads."""
        if not v.strip():
            raise ValueError("imageBase64 is required.")
        return v.strip()


class ExtractionResult(CamelModel):
    """Items recognized in a photo with the model's warnings."""

    items: t.List[DetectedItem] = Field(default_factory=list)
    warnings: t.List[str] = Field(default_factory=list)
