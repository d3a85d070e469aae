"""Tests for fear-spike signal detection and status classification."""

from datetime import date

import pytest

from fearspike_app.errors import InsufficientDataError
from fearspike_app.signals.detector import (
    EntryStatus,
    classify_status,
    detect_signals,
    is_fear_decline,
    require_status,
)

D0, D1, D2, D3, D4 = (date(2024, 3, d) for d in (4, 5, 6, 7, 8))


class TestDetectSignals:
    """Test detect_signals edge detector."""

    def test_fires_on_decline_from_above_threshold(self, combined):
        series = combined([(D0, 100, 35), (D1, 100, 32), (D2, 100, 40)])

        events = detect_signals(series)

        assert len(events) == 1
        assert events[0].date == D1
        assert events[0].primary_at_signal == 100
        assert events[0].secondary_at_signal == 32

    def test_event_returns_start_pending(self, combined):
        series = combined([(D0, 100, 35), (D1, 100, 32)])

        event = detect_signals(series)[0]

        assert event.six_month_return is None
        assert event.twelve_month_return is None
        assert event.is_pending

    def test_multi_day_decline_fires_each_day(self, combined):
        # Memoryless: every decreasing day with a prior close above 30 fires
        series = combined([(D0, 100, 45), (D1, 101, 40), (D2, 102, 35), (D3, 103, 31), (D4, 104, 29)])

        events = detect_signals(series)

        assert [e.date for e in events] == [D1, D2, D3, D4]

    def test_decline_from_exactly_threshold_does_not_fire(self, combined):
        series = combined([(D0, 100, 30.0), (D1, 100, 29.9)])

        assert detect_signals(series) == []

    def test_flat_secondary_does_not_fire(self, combined):
        series = combined([(D0, 100, 35), (D1, 100, 35)])

        assert detect_signals(series) == []

    def test_rise_above_threshold_does_not_fire(self, combined):
        series = combined([(D0, 100, 25), (D1, 100, 35), (D2, 100, 45)])

        assert detect_signals(series) == []

    def test_never_fires_at_first_index(self, combined):
        series = combined([(D0, 100, 80), (D1, 100, 90)])

        events = detect_signals(series)

        assert all(e.date != D0 for e in events)

    @pytest.mark.parametrize("rows", [[], [(D0, 100, 50)]])
    def test_short_series(self, combined, rows):
        assert detect_signals(combined(rows)) == []

    def test_custom_threshold(self, combined):
        series = combined([(D0, 100, 22), (D1, 100, 21)])

        assert detect_signals(series, threshold=30.0) == []
        assert [e.date for e in detect_signals(series, threshold=20.0)] == [D1]

    def test_events_in_ascending_order(self, combined):
        series = combined([(D0, 1, 31), (D1, 1, 30.5), (D2, 1, 33), (D3, 1, 32)])

        events = detect_signals(series)

        assert [e.date for e in events] == [D1, D3]


class TestIsFearDecline:
    """Test the pairwise predicate."""

    def test_predicate(self, combined):
        prev, curr = combined([(D0, 1, 30.01), (D1, 1, 30.0)])
        assert is_fear_decline(prev, curr) is True

        prev, curr = combined([(D0, 1, 30.0), (D1, 1, 10.0)])
        assert is_fear_decline(prev, curr) is False


class TestClassifyStatus:
    """Test classify_status labels."""

    def test_good_time_to_enter(self, combined):
        series = combined([(D0, 1, 20), (D1, 1, 35), (D2, 1, 33)])

        assert classify_status(series) == EntryStatus.ENTER
        assert classify_status(series) == "Good Time to Enter"

    def test_high_fear_when_still_rising(self, combined):
        series = combined([(D0, 1, 31), (D1, 1, 36)])

        assert classify_status(series) == "High Fear: Monitor"

    def test_high_fear_on_first_cross(self, combined):
        series = combined([(D0, 1, 25), (D1, 1, 31)])

        assert classify_status(series) == EntryStatus.HIGH_FEAR

    def test_wait_when_calm(self, combined):
        series = combined([(D0, 1, 14), (D1, 1, 13)])

        assert classify_status(series) == "Wait"

    def test_threshold_boundary_is_wait(self, combined):
        series = combined([(D0, 1, 30.0), (D1, 1, 29.9)])

        assert classify_status(series) == EntryStatus.WAIT

    @pytest.mark.parametrize("rows", [[], [(D0, 1, 40)]])
    def test_no_data(self, combined, rows):
        assert classify_status(combined(rows)) == "No Data"

    def test_only_latest_pair_matters(self, combined):
        series = combined([(D0, 1, 40), (D1, 1, 35), (D2, 1, 12), (D3, 1, 11)])

        assert classify_status(series) == EntryStatus.WAIT


class TestRequireStatus:
    """Test require_status error path."""

    def test_raises_for_single_sample(self, combined):
        with pytest.raises(InsufficientDataError) as exc_info:
            require_status(combined([(D0, 1, 40)]))

        assert exc_info.value.required_count == 2
        assert exc_info.value.available_count == 1

    def test_delegates_when_enough_samples(self, combined):
        assert require_status(combined([(D0, 1, 40), (D1, 1, 35)])) == EntryStatus.ENTER
