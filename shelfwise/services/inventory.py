"""SQL-backed readers for pantry items, device tokens and users."""

import typing as t

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from shelfwise.core.models import DeviceToken, PantryItem, User
from shelfwise.schemas.reminder import (
    PantryItemSnapshot,
    UserConfig,
    UserProfile,
)
from shelfwise.services.reminder_sweep import InventoryReader, TokenReader


class SqlInventoryReader(InventoryReader):
    """Reads pantry items from the database."""

    db: AsyncSession

    def __init__(self, db: AsyncSession) -> None:
        """Initialize SqlInventoryReader.

        Args:
            db (AsyncSession): The database session.
        """
        self.db = db

    async def fetch_non_archived_items(
        self, uid: str
    ) -> t.List[PantryItemSnapshot]:
        """Fetch a user's non-archived pantry items.

        Args:
            uid (str): The user's ID.

        Returns:
            t.List[PantryItemSnapshot]: Items in insertion order.
        """
        items: t.Sequence[PantryItem] = (
            (
                await self.db.execute(
                    select(PantryItem)
                    .where(
                        PantryItem.user_id == uid,
                        PantryItem.is_archived.is_(False),
                    )
                    .order_by(PantryItem.id)
                )
            )
            .scalars()
            .all()
        )
        return [
            PantryItemSnapshot(
                name=item.name,
                is_archived=item.is_archived,
                expiry_date=item.expiry_date,
                added_at=item.added_at,
                is_perishable_no_expiry=item.is_perishable_no_expiry,
            )
            for item in items
        ]


class SqlTokenReader(TokenReader):
    """Reads device tokens from the database."""

    db: AsyncSession

    def __init__(self, db: AsyncSession) -> None:
        """Initialize SqlTokenReader.

        Args:
            db (AsyncSession): The database session.
        """
        self.db = db

    async def fetch_device_tokens(self, uid: str) -> t.List[str]:
        """Fetch a user's device tokens, dropping blank ones.

        Args:
            uid (str): The user's ID.

        Returns:
            t.List[str]: The non-empty registration tokens.
        """
        tokens: t.Sequence[str] = (
            (
                await self.db.execute(
                    select(DeviceToken.token)
                    .where(DeviceToken.user_id == uid)
                    .order_by(DeviceToken.id)
                )
            )
            .scalars()
            .all()
        )
        return [token for token in tokens if isinstance(token, str) and token]


async def load_user_profiles(
    db: AsyncSession, only_uid: str | None = None
) -> t.List[UserProfile]:
    """Load users with their reminder settings.

    Args:
        db (AsyncSession): The database session.
        only_uid (str | None): Load just this user when given.

    Returns:
        t.List[UserProfile]: The user profiles.
    """
    query = select(User).order_by(User.uid)
    if only_uid is not None:
        query = query.where(User.uid == only_uid)

    users: t.Sequence[User] = (await db.execute(query)).scalars().all()
    return [
        UserProfile(
            uid=user.uid,
            config=UserConfig(
                notification_threshold_days=user.notification_threshold_days,
                perishable_reminder_days=user.perishable_reminder_days,
            ),
        )
        for user in users
    ]
