"""SQLAlchemy database models."""

import typing as t
from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shelfwise.core.database import Base


class User(Base):  # pylint: disable=too-few-public-methods
    """Pantry owner with their reminder preferences."""

    __tablename__ = "users"

    uid: Mapped[str] = mapped_column(String(128), primary_key=True)
    notification_threshold_days: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    perishable_reminder_days: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),  # pylint: disable=not-callable
    )

    # Relationships
    pantry_items: Mapped[t.List["PantryItem"]] = relationship(
        "PantryItem", back_populates="owner", cascade="all, delete-orphan"
    )
    device_tokens: Mapped[t.List["DeviceToken"]] = relationship(
        "DeviceToken", back_populates="owner", cascade="all, delete-orphan"
    )


class PantryItem(Base):  # pylint: disable=too-few-public-methods
    """Single inventory entry in a user's pantry."""

    __tablename__ = "pantry_items"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.uid", ondelete="CASCADE"), nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(
        String(100), nullable=False, default="Other"
    )
    expiry_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    added_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),  # pylint: disable=not-callable
    )
    is_archived: Mapped[bool] = mapped_column(Boolean, default=False)
    is_perishable_no_expiry: Mapped[bool] = mapped_column(
        Boolean, default=False
    )
    quantity_value: Mapped[float | None] = mapped_column(Float, nullable=True)
    quantity_unit: Mapped[str | None] = mapped_column(
        String(20), nullable=True
    )
    quantity_note: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )

    __table_args__ = (
        Index("ix_pantry_items_user_archived", "user_id", "is_archived"),
    )

    # Relationships
    owner: Mapped["User"] = relationship("User", back_populates="pantry_items")


class DeviceToken(Base):  # pylint: disable=too-few-public-methods
    """Push registration token of one of a user's devices."""

    __tablename__ = "device_tokens"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True
    )
    user_id: Mapped[str] = mapped_column(
        String(128), ForeignKey("users.uid", ondelete="CASCADE"), nullable=False
    )
    token: Mapped[str] = mapped_column(
        String(512), unique=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),  # pylint: disable=not-callable
    )

    __table_args__ = (Index("ix_device_tokens_user_id", "user_id"),)

    # Relationships
    owner: Mapped["User"] = relationship(
        "User", back_populates="device_tokens"
    )
