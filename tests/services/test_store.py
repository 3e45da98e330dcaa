from __future__ import annotations

import logging
from datetime import date, datetime

import pytest

from rangepick.services.clock import FixedClock
from rangepick.services.dates import NativeDateAdapter
from rangepick.services.presets.resolver import PresetResolver
from rangepick.services.store import DateRangeStore, RangeState, StoreEvent


@pytest.fixture
def store(
    resolver: PresetResolver, dates: NativeDateAdapter, clock: FixedClock
) -> DateRangeStore:
    return DateRangeStore(resolver, dates, clock)


def test_initial_state(store: DateRangeStore) -> None:
    assert store.start_date is None
    assert store.end_date is None
    assert store.selecting_start
    assert store.left_month == datetime(2026, 2, 1)
    assert store.right_month == datetime(2026, 3, 1)
    assert store.range == RangeState(start="", end="")
    assert store.is_valid
    assert store.range_text == ""
    assert not store.has_pending_changes


def test_set_range_from_iso_strings(store: DateRangeStore) -> None:
    store.set_range("2026-02-15", "2026-02-21")

    assert store.start_date == datetime(2026, 2, 15)
    assert store.end_date == datetime(2026, 2, 21)
    assert store.range == RangeState(start="2026-02-15", end="2026-02-21")
    assert store.range_text == "15 Feb - 21 Feb"
    assert store.selecting_start


def test_partial_selections_format_text(store: DateRangeStore) -> None:
    store.set_start(datetime(2026, 2, 15, 17, 30))
    assert store.start_date == datetime(2026, 2, 15)
    assert store.range_text == "15 Feb"
    assert not store.selecting_start

    store.set_start(None)
    store.set_end(date(2026, 3, 2))
    assert store.range_text == "? - 2 Mar"


def test_end_before_start_is_rejected(
    store: DateRangeStore, caplog: pytest.LogCaptureFixture
) -> None:
    store.set_start("2026-02-15")

    with caplog.at_level(logging.WARNING):
        store.set_end("2026-02-10")

    assert store.end_date is None
    assert store.range.end == ""
    assert "End date cannot be before start date" in caplog.text


def test_later_start_clears_existing_end(store: DateRangeStore) -> None:
    store.set_range("2026-02-10", "2026-02-14")

    store.set_start("2026-02-20")

    assert store.start_date == datetime(2026, 2, 20)
    assert store.end_date is None


def test_disabled_dates_are_rejected(
    store: DateRangeStore, caplog: pytest.LogCaptureFixture
) -> None:
    store.configure(disabled_dates=[date(2026, 2, 14)])

    with caplog.at_level(logging.WARNING):
        store.set_start(date(2026, 2, 14))

    assert store.start_date is None
    assert "Cannot select disabled date 2026-02-14" in caplog.text


def test_selection_is_clamped_to_bounds(store: DateRangeStore) -> None:
    store.configure(min_date=date(2026, 2, 10), max_date=date(2026, 2, 20))

    store.set_range("2026-02-01", "2026-02-28")

    assert store.range == RangeState(start="2026-02-10", end="2026-02-20")
    assert store.is_valid


def test_bounds_added_later_invalidate_the_range(store: DateRangeStore) -> None:
    store.set_range("2026-02-15", "2026-02-21")

    store.configure(max_date=date(2026, 2, 18))

    assert not store.is_valid


def test_malformed_dates_are_ignored(
    store: DateRangeStore, caplog: pytest.LogCaptureFixture
) -> None:
    store.set_start("2026-02-10")

    with caplog.at_level(logging.WARNING):
        store.set_start("2026-02-31")

    assert store.start_date == datetime(2026, 2, 10)
    assert "Ignoring malformed date '2026-02-31'" in caplog.text


def test_time_picker(store: DateRangeStore, caplog: pytest.LogCaptureFixture) -> None:
    store.set_range("2026-02-15", "2026-02-21")
    assert store.range.as_dict() == {"start": "2026-02-15", "end": "2026-02-21"}

    store.configure(enable_time_picker=True)
    store.set_start_time("09:30")
    with caplog.at_level(logging.WARNING):
        store.set_end_time("24:00")

    assert store.range == RangeState(
        start="2026-02-15", end="2026-02-21", start_time="09:30", end_time="23:59"
    )
    assert "Ignoring malformed end time '24:00'" in caplog.text


def test_pending_changes_apply_and_cancel(store: DateRangeStore) -> None:
    store.set_pending_start("2026-02-03")
    store.set_pending_end("2026-02-05")

    assert store.has_pending_changes
    assert store.start_date is None
    assert store.pending_start == datetime(2026, 2, 3)

    store.apply_pending()

    assert store.range == RangeState(start="2026-02-03", end="2026-02-05")
    assert not store.has_pending_changes
    assert store.pending_start is None

    store.set_pending_start("2026-02-01")
    store.cancel_pending()

    assert store.start_date == datetime(2026, 2, 3)
    assert not store.has_pending_changes


def test_apply_preset(store: DateRangeStore, caplog: pytest.LogCaptureFixture) -> None:
    assert store.apply_preset("last_7_days") is True
    assert store.range == RangeState(start="2026-02-15", end="2026-02-21")

    with caplog.at_level(logging.WARNING):
        assert store.apply_preset("NOT_A_PRESET") is False

    assert store.range == RangeState(start="2026-02-15", end="2026-02-21")
    assert "Preset 'NOT_A_PRESET' not found" in caplog.text


def test_apply_preset_with_pinned_now(store: DateRangeStore) -> None:
    store.apply_preset("THIS_MONTH", date(2024, 2, 10))

    assert store.range == RangeState(start="2024-02-01", end="2024-02-29")


def test_visible_months_stay_ordered(store: DateRangeStore) -> None:
    store.set_left_month(date(2026, 5, 10))
    assert store.left_month == datetime(2026, 5, 1)
    assert store.right_month == datetime(2026, 6, 1)

    store.set_right_month(date(2026, 1, 3))
    assert store.right_month == datetime(2026, 1, 1)
    assert store.left_month == datetime(2025, 12, 1)

    store.set_right_month(date(2026, 9, 30))
    assert store.left_month == datetime(2025, 12, 1)
    assert store.right_month == datetime(2026, 9, 1)


def test_reset(store: DateRangeStore) -> None:
    store.set_range("2026-02-15", "2026-02-21")
    store.set_pending_start("2026-02-01")

    store.reset()

    assert store.range == RangeState(start="", end="")
    assert store.selecting_start
    assert not store.has_pending_changes


def test_snapshots(store: DateRangeStore) -> None:
    store.load_snapshot({"start": "2026-02-01", "end": "2026-02-03", "start_time": "08:00"})

    snapshot = store.get_snapshot()
    assert snapshot == RangeState(start="2026-02-01", end="2026-02-03")
    assert store.start_time == "08:00"

    store.reset()
    store.load_snapshot(snapshot)
    assert store.get_snapshot() == snapshot


def test_listeners_receive_events(store: DateRangeStore) -> None:
    events: list[StoreEvent] = []
    store.add_listener(events.append)

    store.set_start("2026-02-10")
    store.set_end("2026-02-12")
    store.remove_listener(events.append)
    store.reset()

    assert [event.name for event in events] == ["start", "end"]
    assert events[-1].state == RangeState(start="2026-02-10", end="2026-02-12")


def test_rejected_selection_does_not_notify(store: DateRangeStore) -> None:
    events: list[StoreEvent] = []
    store.set_start("2026-02-15")
    store.add_listener(events.append)

    store.set_end("2026-02-01")

    assert events == []


def test_failing_listener_is_logged_and_others_still_run(
    store: DateRangeStore, caplog: pytest.LogCaptureFixture
) -> None:
    seen: list[str] = []

    def broken(event: StoreEvent) -> None:
        raise RuntimeError("boom")

    store.add_listener(broken)
    store.add_listener(lambda event: seen.append(event.name))

    with caplog.at_level(logging.ERROR):
        store.set_start("2026-02-10")

    assert seen == ["start"]
    assert "Range store listener" in caplog.text


def test_disabled_generator_survives_repeated_checks(store: DateRangeStore) -> None:
    store.configure(disabled_dates=(day for day in [date(2026, 2, 14)]))

    store.set_start(date(2026, 2, 14))
    store.set_start(date(2026, 2, 14))

    assert store.start_date is None
    assert store.config.disabled_dates == (date(2026, 2, 14),)
