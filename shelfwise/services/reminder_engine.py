"""Pantry reminder evaluation.

Pure functions deciding which pantry items deserve a reminder and turning
that decision into a push notification. All date arithmetic happens on UTC
calendar days so that the time of day a sweep runs at never shifts a
boundary.
"""

import typing as t
from datetime import date, datetime, timedelta

from shelfwise.core.globals import (
    REMINDER_CLAUSE_SEPARATOR,
    REMINDER_MAX_LISTED_NAMES,
    REMINDER_TITLE,
)
from shelfwise.schemas.reminder import (
    NotificationPayload,
    PantryItemSnapshot,
    ReminderDecision,
    UserConfig,
)
from shelfwise.utils.dates import utc_day


def _shift_day(day: date, days: int) -> date | None:
    """Move a day by a number of days, None when past the calendar limits."""
    try:
        return day + timedelta(days=days)
    except OverflowError:
        return None


def evaluate_user(
    config: UserConfig,
    items: t.Iterable[PantryItemSnapshot],
    now: datetime,
) -> ReminderDecision:
    """Select the items of one user that qualify for a reminder.

    A dated item qualifies when its expiry date lies within
    ``[today, today + threshold]``. A perishable item without expiry date
    qualifies when it was added on or before ``today - perishable days``.
    Both bounds are inclusive and an item may qualify for both lists.
    Archived items are expected to be filtered out by the caller.

    Args:
        config (UserConfig): The user's reminder settings.
        items (t.Iterable[PantryItemSnapshot]): Non-archived pantry items.
        now (datetime): Current instant, naive values are taken as UTC.

    Returns:
        ReminderDecision: Qualifying item names in input order.
    """
    today: date = utc_day(now)
    expiry_threshold: date = (
        _shift_day(today, config.notification_threshold_days) or date.max
    )
    # None when the cutoff predates the calendar, nothing is stale then.
    stale_cutoff: date | None = _shift_day(
        today, -config.perishable_reminder_days
    )

    decision: ReminderDecision = ReminderDecision()
    for item in items:
        if (
            item.expiry_date is not None
            and today <= item.expiry_date <= expiry_threshold
        ):
            decision.dated_expiring_soon.append(item.name)

        if (
            item.is_perishable_no_expiry
            and stale_cutoff is not None
            and item.added_at is not None
            and utc_day(item.added_at) <= stale_cutoff
        ):
            decision.perishable_stale.append(item.name)

    return decision


def _format_clause(label: str, names: t.Sequence[str]) -> str:
    listed: str = ", ".join(names[:REMINDER_MAX_LISTED_NAMES])
    return f"{len(names)} {label}: {listed}"


def build_notification(
    decision: ReminderDecision,
) -> NotificationPayload | None:
    """Build the push notification for a reminder decision.

    Args:
        decision (ReminderDecision): The evaluated decision.

    Returns:
        NotificationPayload | None:
            The notification, or None when nothing qualifies and nothing
            must be sent.
    """
    if decision.is_empty:
        return None

    clauses: t.List[str] = []
    if decision.dated_expiring_soon:
        clauses.append(
            _format_clause(
                "item(s) nearing expiry", decision.dated_expiring_soon
            )
        )
    if decision.perishable_stale:
        clauses.append(
            _format_clause(
                "perishable item(s) in pantry for a while",
                decision.perishable_stale,
            )
        )

    return NotificationPayload(
        title=REMINDER_TITLE,
        body=REMINDER_CLAUSE_SEPARATOR.join(clauses),
        priority="high",
        data={
            "type": "pantry_reminder",
            "expiringCount": str(len(decision.dated_expiring_soon)),
            "perishableCount": str(len(decision.perishable_stale)),
        },
    )
