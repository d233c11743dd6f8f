"""Background service for sweeping pantries and sending reminders."""

import logging
import typing as t
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shelfwise.core.config import SETTINGS
from shelfwise.core.database import ASYNC_SESSION_MAKER
from shelfwise.schemas.reminder import SweepResult, UserProfile
from shelfwise.services.inventory import (
    SqlInventoryReader,
    SqlTokenReader,
    load_user_profiles,
)
from shelfwise.services.reminder_sweep import Notifier, sweep

LOGGER = logging.getLogger(__name__)


class ReminderPermissionError(Exception):
    """Raised when a caller may not trigger an on-demand sweep."""

    def __init__(self, uid: str) -> None:
        self.uid = uid
        super().__init__(f"User {uid} is not allowed to run reminder sweeps")


def check_reminder_permission(uid: str) -> None:
    """Ensure the caller is on the on-demand sweep allow-list.

    Args:
        uid (str): The caller's user ID.
    """
    if uid not in SETTINGS.reminder_debug_uids:
        raise ReminderPermissionError(uid)


async def run_reminder_sweep(
    notifier: Notifier,
    only_uid: str | None = None,
    now: datetime | None = None,
    session_maker: async_sessionmaker[AsyncSession] = ASYNC_SESSION_MAKER,
) -> SweepResult:
    """Sweep stored pantries and push reminders.

    Args:
        notifier (Notifier):
            Delivers the notifications.
        only_uid (str | None):
            Sweep just this user, all users when None.
        now (datetime | None):
            Evaluation instant, the current time when None.
        session_maker (async_sessionmaker[AsyncSession]):
            Factory of the session the readers use.

    Returns:
        SweepResult: Aggregate counters of the sweep.
    """
    async with session_maker() as session:
        users: t.List[UserProfile] = await load_user_profiles(
            session, only_uid
        )
        result: SweepResult = await sweep(
            users,
            SqlInventoryReader(session),
            SqlTokenReader(session),
            notifier,
            now or datetime.now(timezone.utc),
            only_uid=only_uid,
        )

    LOGGER.info(
        "Reminder sweep done: %d users evaluated, %d notifications attempted,"
        " %d delivered, %d failed",
        result.users_evaluated,
        result.notifications_attempted,
        result.success_count,
        result.failure_count,
    )
    return result


async def send_pantry_reminders_task(notifier: Notifier | None) -> None:
    """Scheduled daily sweep over all users.

    Args:
        notifier (Notifier | None): Push delivery, None when not configured.
    """
    if notifier is None:
        LOGGER.debug("Push notifications not enabled, skipping reminder sweep")
        return

    LOGGER.info("Running pantry reminder sweep...")
    try:
        await run_reminder_sweep(notifier)
    except Exception:  # pylint: disable=broad-except
        LOGGER.exception("Error in pantry reminder sweep")
