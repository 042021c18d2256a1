"""Tests for chart aggregation."""

from datetime import date, datetime

import pytest
import pytz

from waterlog.core.observations import Observation
from waterlog.rollups.aggregator import (
    Bucket,
    WindowPreconditionError,
    aggregate,
    aggregate_by_day,
    day_label,
    hour_label,
)
from waterlog.rollups.spans import Span
from waterlog.rollups.time_windows import compute_window

UTC = pytz.UTC
NEW_YORK = pytz.timezone("America/New_York")


def obs(amount, fatigue, *args, tz=UTC):
    return Observation(amount_cups=amount, fatigue=fatigue, timestamp=tz.localize(datetime(*args)))


def test_hour_labels():
    """Test 12-hour clock labels."""
    assert hour_label(0) == "12AM"
    assert hour_label(1) == "1AM"
    assert hour_label(11) == "11AM"
    assert hour_label(12) == "12PM"
    assert hour_label(13) == "1PM"
    assert hour_label(23) == "11PM"


def test_hour_label_rejects_out_of_range():
    """Test hour labels only exist for 0..23."""
    with pytest.raises(ValueError, match="hour must be in 0..23"):
        hour_label(24)


def test_day_label_has_no_leading_zeros():
    """Test day labels are month/day without padding."""
    assert day_label(date(2024, 1, 5)) == "1/5"
    assert day_label(date(2024, 12, 25)) == "12/25"


def test_week_example_two_observations_same_day():
    """Test two entries on the window's last day: sum 3, average 3, count 2."""
    window = compute_window(date(2024, 3, 15), Span.WEEK, "UTC")
    entries = [
        obs(1, 2, 2024, 3, 15, 10, 0),
        obs(2, 4, 2024, 3, 15, 10, 30),
    ]

    series = aggregate(entries, window, Span.WEEK, "UTC")

    assert series.labels == ["3/9", "3/10", "3/11", "3/12", "3/13", "3/14", "3/15"]
    assert series.buckets[-1] == Bucket(label="3/15", primary_sum=3.0, secondary_average=3.0, count=2)
    for bucket in series.buckets[:-1]:
        assert bucket.primary_sum == 0
        assert bucket.secondary_average == 0
        assert bucket.count == 0


def test_hour_mode_always_has_24_buckets():
    """Test day span yields 24 buckets even without data."""
    window = compute_window(date(2024, 3, 15), Span.DAY, "UTC")

    series = aggregate([], window, tz="UTC")

    assert len(series) == 24
    assert series.labels[0] == "12AM"
    assert series.labels[12] == "12PM"
    assert series.labels[-1] == "11PM"
    assert series.primary_series == [0.0] * 24
    assert series.secondary_series == [0.0] * 24


def test_hour_mode_groups_by_local_hour():
    """Test entries are summed and averaged per hour."""
    window = compute_window(date(2024, 3, 15), Span.DAY, "UTC")
    entries = [
        obs(1.0, 2, 2024, 3, 15, 10, 15),
        obs(2.0, 5, 2024, 3, 15, 10, 45),
        obs(0.5, 1, 2024, 3, 15, 23, 59),
    ]

    series = aggregate(entries, window, tz="UTC")

    assert series.buckets[10].primary_sum == pytest.approx(3.0)
    assert series.buckets[10].secondary_average == pytest.approx(3.5)
    assert series.buckets[10].count == 2
    assert series.buckets[23].primary_sum == pytest.approx(0.5)
    assert series.buckets[23].count == 1
    assert sum(bucket.count for bucket in series.buckets) == 3


def test_hour_mode_rejects_other_days():
    """Test hour buckets refuse observations from another calendar day."""
    window = compute_window(date(2024, 3, 15), Span.DAY, "UTC")
    stray = obs(1.0, 3, 2024, 3, 16, 9, 0)

    with pytest.raises(WindowPreconditionError, match="outside 2024-03-15") as exc_info:
        aggregate([obs(1.0, 3, 2024, 3, 15, 9, 0), stray], window, tz="UTC")

    assert exc_info.value.offending == [stray]


@pytest.mark.parametrize("span", [Span.WEEK, Span.TWO_WEEKS, Span.MONTH])
def test_day_mode_bucket_count_matches_window_length(span):
    """Test calendar-day mode yields window_length buckets."""
    window = compute_window(date(2024, 3, 15), span, "UTC")

    series = aggregate([], window, tz="UTC")

    assert len(series.labels) == span.window_length
    assert len(series.primary_series) == span.window_length
    assert len(series.secondary_series) == span.window_length
    assert series.labels[-1] == "3/15"


def test_day_mode_drops_observations_outside_window():
    """Test out-of-window entries are ignored."""
    window = compute_window(date(2024, 3, 15), Span.WEEK, "UTC")
    entries = [
        obs(5.0, 5, 2024, 3, 8, 23, 0),
        obs(1.0, 1, 2024, 3, 9, 0, 0),
        obs(5.0, 5, 2024, 3, 16, 0, 0),
    ]

    series = aggregate_by_day(entries, window, "UTC")

    assert series.buckets[0].count == 1
    assert sum(bucket.count for bucket in series.buckets) == 1


def test_day_mode_uses_local_calendar_days_across_dst():
    """Test a late-evening entry after DST fall back lands on its own day."""
    window = compute_window(date(2025, 11, 8), Span.WEEK, "America/New_York")
    # 25-hour day: a millisecond-based bucket index would push this to 11/3
    late = obs(2.0, 4, 2025, 11, 2, 23, 30, tz=NEW_YORK)

    series = aggregate([late], window, tz="America/New_York")

    assert series.labels[0] == "11/2"
    assert series.buckets[0].count == 1
    assert series.buckets[1].count == 0


def test_aggregate_rejects_mismatched_span():
    """Test span must match the window it was computed for."""
    window = compute_window(date(2024, 3, 15), Span.WEEK, "UTC")

    with pytest.raises(ValueError, match="does not match"):
        aggregate([], window, Span.MONTH, "UTC")


def test_aggregate_accepts_span_names():
    """Test span given by name is parsed, and mismatches stay ValueError."""
    window = compute_window(date(2024, 3, 15), Span.WEEK, "UTC")

    series = aggregate([obs(1.0, 2, 2024, 3, 15, 7, 0)], window, "week", "UTC")

    assert series.span is Span.WEEK
    assert series.primary_series[-1] == 1.0
    with pytest.raises(ValueError, match="does not match"):
        aggregate([], window, "month", "UTC")
    with pytest.raises(ValueError, match="Unknown span"):
        aggregate([], window, "fortnight", "UTC")


def test_aggregate_is_idempotent():
    """Test repeated aggregation returns equal output."""
    window = compute_window(date(2024, 3, 15), Span.TWO_WEEKS, "UTC")
    entries = [obs(1.5, 3, 2024, 3, 10, 8, 0), obs(0.5, 2, 2024, 3, 14, 18, 0)]

    assert aggregate(entries, window, tz="UTC") == aggregate(entries, window, tz="UTC")


def test_chart_series_to_dict():
    """Test the dictionary shape consumed by chart widgets."""
    window = compute_window(date(2024, 3, 15), Span.WEEK, "UTC")

    data = aggregate([obs(1.0, 4, 2024, 3, 15, 7, 0)], window, tz="UTC").to_dict()

    assert data["span"] == "week"
    assert data["labels"][-1] == "3/15"
    assert data["primary_series"][-1] == 1.0
    assert data["secondary_series"][-1] == 4.0
    assert data["counts"] == [0, 0, 0, 0, 0, 0, 1]
