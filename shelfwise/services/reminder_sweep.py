"""Reminder sweep over a population of users."""

import abc
import logging
import typing as t
from datetime import datetime

from shelfwise.schemas.reminder import (
    DispatchResult,
    NotificationPayload,
    PantryItemSnapshot,
    ReminderDecision,
    SweepResult,
    UserProfile,
)
from shelfwise.services.reminder_engine import build_notification, evaluate_user

LOGGER = logging.getLogger(__name__)


class InventoryReader(abc.ABC):
    """Source of a user's non-archived pantry items."""

    @abc.abstractmethod
    async def fetch_non_archived_items(
        self, uid: str
    ) -> t.Sequence[PantryItemSnapshot]:
        """Return the user's pantry items that are not archived."""


class TokenReader(abc.ABC):
    """Source of a user's push registration tokens."""

    @abc.abstractmethod
    async def fetch_device_tokens(self, uid: str) -> t.Sequence[str]:
        """Return the user's non-empty device tokens."""


class Notifier(abc.ABC):
    """Push delivery to a batch of devices."""

    @abc.abstractmethod
    async def send_batch(
        self, tokens: t.Sequence[str], payload: NotificationPayload
    ) -> DispatchResult:
        """Send the payload to every token.

        Individual token failures are reported in the result, never raised.
        """


async def sweep(  # pylint: disable=too-many-arguments,too-many-positional-arguments
    users: t.Iterable[UserProfile],
    inventory_reader: InventoryReader,
    token_reader: TokenReader,
    notifier: Notifier,
    now: datetime,
    only_uid: str | None = None,
) -> SweepResult:
    """Evaluate every user's pantry and push reminders where due.

    Users are processed one after another. A user whose inventory or
    tokens cannot be read, or whose dispatch raises, is logged and the
    sweep moves on to the next user.

    Args:
        users (t.Iterable[UserProfile]):
            Users with their reminder settings.
        inventory_reader (InventoryReader):
            Reads non-archived pantry items.
        token_reader (TokenReader):
            Reads device tokens.
        notifier (Notifier):
            Delivers push notifications.
        now (datetime):
            Current instant used for every user of this sweep.
        only_uid (str | None):
            Restrict the sweep to this single user.

    Returns:
        SweepResult: Aggregate counters.
    """
    result: SweepResult = SweepResult()

    for user in users:
        if only_uid is not None and user.uid != only_uid:
            continue
        result.users_evaluated += 1

        try:
            items: t.Sequence[PantryItemSnapshot] = (
                await inventory_reader.fetch_non_archived_items(user.uid)
            )
        except Exception:  # pylint: disable=broad-except
            LOGGER.exception("Failed to read pantry of user %s", user.uid)
            continue

        decision: ReminderDecision = evaluate_user(user.config, items, now)
        payload: NotificationPayload | None = build_notification(decision)
        if payload is None:
            continue

        try:
            tokens: t.Sequence[str] = await token_reader.fetch_device_tokens(
                user.uid
            )
        except Exception:  # pylint: disable=broad-except
            LOGGER.exception("Failed to read device tokens of %s", user.uid)
            continue
        if not tokens:
            LOGGER.debug("User %s has no device tokens, skipping", user.uid)
            continue

        result.notifications_attempted += 1
        try:
            dispatch: DispatchResult = await notifier.send_batch(
                tokens, payload
            )
        except Exception:  # pylint: disable=broad-except
            LOGGER.exception("Pantry reminder dispatch failed for %s", user.uid)
            dispatch = DispatchResult(
                failure_count=len(tokens), failed_tokens=list(tokens)
            )

        result.success_count += dispatch.success_count
        result.failure_count += dispatch.failure_count
        LOGGER.info(
            "Pantry reminder sent to %s: %d succeeded, %d failed",
            user.uid,
            dispatch.success_count,
            dispatch.failure_count,
        )

    return result
