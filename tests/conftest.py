"""Shared fixtures and fakes for the Shelfwise test suite."""

import typing as t
from datetime import date, datetime, timezone

import pytest

from shelfwise.schemas.reminder import (
    DispatchResult,
    NotificationPayload,
    PantryItemSnapshot,
)
from shelfwise.services.reminder_sweep import (
    InventoryReader,
    Notifier,
    TokenReader,
)


# ============================================================================
# Collaborator fakes
# ============================================================================


class FakeInventory(InventoryReader):
    """In-memory inventory keyed by uid."""

    def __init__(
        self,
        items: t.Dict[str, t.List[PantryItemSnapshot]],
        failing: t.Iterable[str] = (),
    ):
        self.items = items
        self.failing = set(failing)
        self.calls: t.List[str] = []

    async def fetch_non_archived_items(self, uid):
        self.calls.append(uid)
        if uid in self.failing:
            raise RuntimeError(f"inventory unavailable for {uid}")
        return [i for i in self.items.get(uid, []) if not i.is_archived]


class FakeTokens(TokenReader):
    """In-memory device tokens keyed by uid."""

    def __init__(self, tokens: t.Dict[str, t.List[str]]):
        self.tokens = tokens
        self.calls: t.List[str] = []

    async def fetch_device_tokens(self, uid):
        self.calls.append(uid)
        return list(self.tokens.get(uid, []))


class FakeNotifier(Notifier):
    """Records dispatches and answers with scripted results."""

    def __init__(
        self,
        results: t.Dict[str, DispatchResult] | None = None,
        raise_for: t.Iterable[str] = (),
    ):
        self.results = results or {}
        self.raise_for = set(raise_for)
        self.sent: t.List[t.Tuple[t.List[str], NotificationPayload]] = []

    async def send_batch(self, tokens, payload):
        self.sent.append((list(tokens), payload))
        first = tokens[0]
        if first in self.raise_for:
            raise ConnectionError("push service unreachable")
        return self.results.get(
            first, DispatchResult(success_count=len(tokens))
        )


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def now() -> datetime:
    """Mid-day instant so that time-of-day stripping is exercised."""
    return datetime(2024, 6, 10, 15, 30, tzinfo=timezone.utc)


@pytest.fixture
def dated_item() -> t.Callable[..., PantryItemSnapshot]:
    def _make(name: str, expiry: date | None, **kwargs) -> PantryItemSnapshot:
        return PantryItemSnapshot(name=name, expiry_date=expiry, **kwargs)

    return _make


@pytest.fixture
def perishable_item() -> t.Callable[..., PantryItemSnapshot]:
    def _make(name: str, added_at: t.Any, **kwargs) -> PantryItemSnapshot:
        return PantryItemSnapshot(
            name=name,
            added_at=added_at,
            is_perishable_no_expiry=True,
            **kwargs,
        )

    return _make
