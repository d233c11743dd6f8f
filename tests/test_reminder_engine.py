"""
Unit tests for the pantry reminder engine.

Tests:
- Dated expiry window boundaries
- Stale perishable cutoff boundaries
- Config defaulting
- Notification body formatting
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from shelfwise.core.config import SETTINGS
from shelfwise.schemas.reminder import (
    PantryItemSnapshot,
    ReminderDecision,
    UserConfig,
)
from shelfwise.services.reminder_engine import build_notification, evaluate_user


# ============================================================================
# Dated items
# ============================================================================


class TestDatedExpiry:
    """Items with an explicit expiry date."""

    def test_scenario_threshold_three_days(self, dated_item):
        now = datetime(2024, 6, 10, tzinfo=timezone.utc)
        items = [
            dated_item("A", date(2024, 6, 12)),
            dated_item("B", date(2024, 6, 14)),
        ]

        decision = evaluate_user(UserConfig(), items, now)

        assert decision.dated_expiring_soon == ["A"]
        assert decision.perishable_stale == []

    def test_both_window_ends_are_inclusive(self, dated_item, now):
        config = UserConfig(notification_threshold_days=3)
        today = now.date()
        items = [
            dated_item("today", today),
            dated_item("last", today + timedelta(days=3)),
            dated_item("too-late", today + timedelta(days=4)),
            dated_item("expired", today - timedelta(days=1)),
        ]

        decision = evaluate_user(config, items, now)

        assert decision.dated_expiring_soon == ["today", "last"]

    def test_zero_threshold_only_includes_today(self, dated_item, now):
        config = UserConfig(notification_threshold_days=0)
        today = now.date()
        items = [
            dated_item("today", today),
            dated_item("tomorrow", today + timedelta(days=1)),
        ]

        assert evaluate_user(config, items, now).dated_expiring_soon == [
            "today"
        ]

    def test_time_of_day_does_not_shift_the_window(self, dated_item):
        late = datetime(2024, 6, 10, 23, 59, 59, tzinfo=timezone.utc)
        items = [dated_item("today", date(2024, 6, 10))]

        assert evaluate_user(UserConfig(), items, late).dated_expiring_soon == [
            "today"
        ]

    def test_now_in_other_timezone_uses_utc_day(self, dated_item):
        # 2024-06-11 01:00 in UTC+2 is still 2024-06-10 in UTC
        now = datetime(
            2024, 6, 11, 1, 0, tzinfo=timezone(timedelta(hours=2))
        )
        items = [dated_item("yesterday-local", date(2024, 6, 10))]

        assert evaluate_user(UserConfig(), items, now).dated_expiring_soon == [
            "yesterday-local"
        ]

    def test_expiry_timestamp_reduced_to_utc_date(self, now):
        item = PantryItemSnapshot(
            name="milk", expiry_date="2024-06-13T22:00:00-05:00"
        )
        # 22:00 at UTC-5 is 2024-06-14 in UTC, one day past the window
        assert item.expiry_date == date(2024, 6, 14)
        assert evaluate_user(UserConfig(), [item], now).is_empty

    def test_malformed_expiry_is_ineligible(self, now):
        item = PantryItemSnapshot(name="mystery", expiry_date="not a date")

        assert item.expiry_date is None
        assert evaluate_user(UserConfig(), [item], now).is_empty

    def test_input_order_and_duplicates_preserved(self, dated_item, now):
        today = now.date()
        items = [
            dated_item("eggs", today + timedelta(days=2)),
            dated_item("apples", today),
            dated_item("eggs", today + timedelta(days=1)),
        ]

        assert evaluate_user(UserConfig(), items, now).dated_expiring_soon == [
            "eggs",
            "apples",
            "eggs",
        ]


# ============================================================================
# Perishable items without expiry
# ============================================================================


class TestStalePerishables:
    """Perishables tracked by the time they were added."""

    def test_scenario_seven_day_cutoff(self, perishable_item):
        now = datetime(2024, 6, 10, tzinfo=timezone.utc)
        items = [
            perishable_item("C", datetime(2024, 6, 3, tzinfo=timezone.utc)),
            perishable_item("D", datetime(2024, 6, 4, tzinfo=timezone.utc)),
        ]

        decision = evaluate_user(
            UserConfig(perishable_reminder_days=7), items, now
        )

        assert decision.perishable_stale == ["C"]

    def test_cutoff_day_included_regardless_of_time(self, perishable_item):
        now = datetime(2024, 6, 10, 8, 0, tzinfo=timezone.utc)
        items = [
            perishable_item(
                "evening", datetime(2024, 6, 3, 21, 45, tzinfo=timezone.utc)
            ),
        ]

        assert evaluate_user(UserConfig(), items, now).perishable_stale == [
            "evening"
        ]

    def test_naive_added_at_is_taken_as_utc(self, perishable_item, now):
        item = perishable_item("bread", datetime(2024, 6, 3, 12, 0))

        assert item.added_at.tzinfo is not None
        assert evaluate_user(UserConfig(), [item], now).perishable_stale == [
            "bread"
        ]

    def test_missing_added_at_is_ineligible(self, perishable_item, now):
        item = perishable_item("herbs", None)

        assert evaluate_user(UserConfig(), [item], now).is_empty

    def test_undated_non_perishable_never_listed(self, now):
        item = PantryItemSnapshot(
            name="salt",
            added_at=datetime(2020, 1, 1, tzinfo=timezone.utc),
            is_perishable_no_expiry=False,
        )

        decision = evaluate_user(UserConfig(), [item], now)

        assert decision.dated_expiring_soon == []
        assert decision.perishable_stale == []

    def test_item_can_qualify_for_both_lists(self, now):
        item = PantryItemSnapshot(
            name="cheese",
            expiry_date=now.date() + timedelta(days=1),
            added_at=now - timedelta(days=30),
            is_perishable_no_expiry=True,
        )

        decision = evaluate_user(UserConfig(), [item], now)

        assert decision.dated_expiring_soon == ["cheese"]
        assert decision.perishable_stale == ["cheese"]


class TestCalendarLimits:
    """Day counts reaching past the representable calendar."""

    def test_huge_threshold_includes_all_future_items(self, dated_item, now):
        config = UserConfig(notification_threshold_days=3_000_000)
        items = [
            dated_item("jam", date(9999, 12, 31)),
            dated_item("expired", now.date() - timedelta(days=1)),
        ]

        decision = evaluate_user(config, items, now)

        assert decision.dated_expiring_soon == ["jam"]

    def test_huge_perishable_days_never_stale(self, perishable_item, now):
        config = UserConfig(perishable_reminder_days=1_000_000_000_000)
        item = perishable_item("rice", datetime(1900, 1, 1, tzinfo=timezone.utc))

        assert evaluate_user(config, [item], now).is_empty


# ============================================================================
# Config defaults
# ============================================================================


class TestUserConfig:
    """Per-user settings with fallbacks."""

    def test_defaults(self):
        config = UserConfig()
        assert config.notification_threshold_days == 3
        assert config.perishable_reminder_days == 7

    @pytest.mark.parametrize("raw", [None, "soon", True, float("nan"), -2])
    def test_unusable_values_fall_back(self, raw):
        config = UserConfig(
            notification_threshold_days=raw, perishable_reminder_days=raw
        )
        assert config.notification_threshold_days == 3
        assert config.perishable_reminder_days == 7

    def test_numeric_strings_and_floats_accepted(self):
        config = UserConfig.model_validate(
            {"notificationThresholdDays": "5", "perishableReminderDays": 10.9}
        )
        assert config.notification_threshold_days == 5
        assert config.perishable_reminder_days == 10

    def test_enormous_integer_falls_back(self):
        config = UserConfig(
            notification_threshold_days=10**400,
            perishable_reminder_days=-(10**400),
        )
        assert config.notification_threshold_days == 3
        assert config.perishable_reminder_days == 7

    def test_defaults_come_from_settings(self, monkeypatch):
        monkeypatch.setattr(SETTINGS, "default_notification_threshold_days", 5)
        monkeypatch.setattr(SETTINGS, "default_perishable_reminder_days", 14)

        assert UserConfig().notification_threshold_days == 5
        config = UserConfig(perishable_reminder_days="junk")
        assert config.perishable_reminder_days == 14


# ============================================================================
# Notification building
# ============================================================================


class TestBuildNotification:
    """Turning a decision into a push payload."""

    def test_empty_decision_sends_nothing(self):
        assert build_notification(ReminderDecision()) is None

    def test_lists_first_three_names_with_full_count(self):
        decision = ReminderDecision(dated_expiring_soon=["A", "B", "C", "D"])

        payload = build_notification(decision)

        assert payload is not None
        assert payload.title == "Pantry reminder"
        assert payload.body == "4 item(s) nearing expiry: A, B, C"
        assert payload.priority == "high"

    def test_perishable_clause_only(self):
        decision = ReminderDecision(perishable_stale=["bread"])

        payload = build_notification(decision)

        assert payload.body == (
            "1 perishable item(s) in pantry for a while: bread"
        )

    def test_both_clauses_joined(self):
        decision = ReminderDecision(
            dated_expiring_soon=["milk", "yogurt"],
            perishable_stale=["bananas", "bread", "herbs", "spinach"],
        )

        payload = build_notification(decision)

        assert payload.body == (
            "2 item(s) nearing expiry: milk, yogurt"
            " | 4 perishable item(s) in pantry for a while:"
            " bananas, bread, herbs"
        )
        assert payload.data["expiringCount"] == "2"
        assert payload.data["perishableCount"] == "4"
