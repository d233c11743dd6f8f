"""Schemas for the pantry reminder engine and sweep."""

import typing as t
from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from shelfwise.core.config import SETTINGS
from shelfwise.utils.dates import parse_utc_date, parse_utc_datetime
from shelfwise.utils.numbers import to_finite_number


def _coerce_day_count(value: t.Any, default: int) -> int:
    """Read a non-negative day count, falling back to the default.

    Args:
        value (t.Any): Raw stored value (number, numeric string, or junk).
        default (int): Value used when the raw one is unusable.

    Returns:
        int: The day count.
    """
    number: float | None = to_finite_number(value)
    if number is None:
        return default
    days: int = int(number)
    return days if days >= 0 else default


class CamelModel(BaseModel):
    """Base schema serialized with camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserConfig(CamelModel):
    """Per-user reminder settings."""

    notification_threshold_days: int = Field(
        default_factory=lambda: SETTINGS.default_notification_threshold_days
    )
    perishable_reminder_days: int = Field(
        default_factory=lambda: SETTINGS.default_perishable_reminder_days
    )

    @field_validator("notification_threshold_days", mode="before")
    @classmethod
    def validate_threshold(cls, v: t.Any) -> int:
        """Fall back to the default threshold for unusable values."""
        return _coerce_day_count(
            v, SETTINGS.default_notification_threshold_days
        )

    @field_validator("perishable_reminder_days", mode="before")
    @classmethod
    def validate_perishable_days(cls, v: t.Any) -> int:
        """Fall back to the default perishable age for unusable values."""
        return _coerce_day_count(
            v, SETTINGS.default_perishable_reminder_days
        )


class UserProfile(BaseModel):
    """A user taking part in a reminder sweep."""

    uid: str
    config: UserConfig = Field(default_factory=UserConfig)


class PantryItemSnapshot(CamelModel):
    """Read-only view of one inventory entry.

    Malformed dates are stored as None, which makes the item ineligible for
    the corresponding reminder instead of failing the whole evaluation.
    """

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, frozen=True
    )

    name: str
    is_archived: bool = False
    expiry_date: date | None = None
    added_at: datetime | None = None
    is_perishable_no_expiry: bool = False

    @field_validator("expiry_date", mode="before")
    @classmethod
    def validate_expiry_date(cls, v: t.Any) -> date | None:
        """Reduce the expiry to a UTC calendar date."""
        return parse_utc_date(v)

    @field_validator("added_at", mode="before")
    @classmethod
    def validate_added_at(cls, v: t.Any) -> datetime | None:
        """Normalize the add time to an aware UTC instant."""
        return parse_utc_datetime(v)


class ReminderDecision(CamelModel):
    """Items of one user that qualify for a reminder."""

    dated_expiring_soon: t.List[str] = Field(default_factory=list)
    perishable_stale: t.List[str] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        """Whether nothing qualifies and no notification should be sent."""
        return not self.dated_expiring_soon and not self.perishable_stale


class NotificationPayload(CamelModel):
    """Push notification content."""

    title: str
    body: str
    priority: t.Literal["high", "normal"] = "high"
    data: t.Dict[str, str] = Field(default_factory=dict)


class DispatchResult(CamelModel):
    """Outcome of sending one payload to a batch of device tokens."""

    success_count: int = 0
    failure_count: int = 0
    failed_tokens: t.List[str] = Field(default_factory=list)


class SweepResult(CamelModel):
    """Aggregate counters of one reminder sweep."""

    users_evaluated: int = 0
    notifications_attempted: int = 0
    success_count: int = 0
    failure_count: int = 0
