"""Tests for spans and window lengths."""

import pytest

from waterlog.rollups.spans import DEFAULT_SPAN, SPAN_LABELS, WINDOW_LENGTHS, Span, window_length


def test_window_lengths():
    """Test fixed day counts per span."""
    assert Span.DAY.window_length == 1
    assert Span.WEEK.window_length == 7
    assert Span.TWO_WEEKS.window_length == 14
    assert Span.MONTH.window_length == 30
    assert window_length(Span.MONTH) == 30


def test_every_span_has_a_length():
    """Test the length mapping is exhaustive."""
    assert set(WINDOW_LENGTHS) == set(Span)
    assert all(length > 0 for length in WINDOW_LENGTHS.values())


def test_every_span_has_a_label():
    assert set(SPAN_LABELS) == set(Span)


def test_bucket_counts():
    """Test DAY buckets hours, other spans bucket days."""
    assert Span.DAY.bucket_count == 24
    assert Span.WEEK.bucket_count == 7
    assert Span.MONTH.bucket_count == 30


def test_default_span_is_week():
    assert DEFAULT_SPAN is Span.WEEK


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("day", Span.DAY),
        ("WEEK", Span.WEEK),
        ("twoweeks", Span.TWO_WEEKS),
        ("two_weeks", Span.TWO_WEEKS),
        ("2 Weeks", Span.TWO_WEEKS),
        (" month ", Span.MONTH),
        (Span.DAY, Span.DAY),
    ],
)
def test_parse(value, expected):
    """Test spans parse from values, names and labels."""
    assert Span.parse(value) is expected


def test_parse_unknown():
    """Test unknown spans are rejected with the valid choices."""
    with pytest.raises(ValueError, match="Unknown span: 'year'"):
        Span.parse("year")


def test_labels():
    assert [span.label for span in Span] == ["Day", "Week", "2 Weeks", "Month"]
