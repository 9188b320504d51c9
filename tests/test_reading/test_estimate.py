"""Tests for reading metrics estimation."""

import pytest

from mdreader.reading.estimate import (
    AVERAGE_READING_SPEED_WPM,
    MS_PER_MINUTE,
    estimate_document_reading_time,
    estimate_reading_progress,
    estimate_reading_time,
    estimate_words_read,
    round_half_up,
)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize(
        "value,expected",
        [(0.5, 1), (1.5, 2), (2.5, 3), (2.4999, 2), (49.5, 50), (0.0, 0)],
    )
    def test_rounding(self, value, expected):
        """Test that halves round up rather than to even."""
        assert round_half_up(value) == expected


class TestEstimateReadingTime:
    """Tests for estimate_reading_time."""

    def test_default_speed(self):
        """Test 500 words at 250 wpm takes two minutes."""
        assert AVERAGE_READING_SPEED_WPM == 250
        assert estimate_reading_time(500) == 2 * MS_PER_MINUTE

    def test_minimum_one_minute(self):
        """Test that short texts still take one minute."""
        assert estimate_reading_time(0) == MS_PER_MINUTE
        assert estimate_reading_time(10) == MS_PER_MINUTE

    def test_fractional_minutes(self):
        """Test that longer texts are not rounded to whole minutes."""
        assert estimate_reading_time(375) == 1.5 * MS_PER_MINUTE

    def test_custom_speed(self):
        """Test a custom reading speed."""
        assert estimate_reading_time(600, reading_speed=200) == 3 * MS_PER_MINUTE

    @pytest.mark.parametrize("speed", [0, -100])
    def test_invalid_speed(self, speed):
        """Test that a non-positive speed is rejected."""
        with pytest.raises(ValueError, match="Reading speed"):
            estimate_reading_time(100, reading_speed=speed)


class TestEstimateWordsRead:
    """Tests for estimate_words_read."""

    def test_one_minute(self):
        """Test words read in one minute."""
        assert estimate_words_read(MS_PER_MINUTE) == 250

    def test_floors_partial_words(self):
        """Test that partial words are floored."""
        # 1001 ms at 250 wpm is 4.17 words
        assert estimate_words_read(1001) == 4

    @pytest.mark.parametrize("time_spent", [0, -5000])
    def test_non_positive_time(self, time_spent):
        """Test that no time means no words."""
        assert estimate_words_read(time_spent) == 0

    def test_invalid_speed(self):
        """Test that a non-positive speed is rejected."""
        with pytest.raises(ValueError):
            estimate_words_read(MS_PER_MINUTE, reading_speed=0)


class TestEstimateReadingProgress:
    """Tests for estimate_reading_progress."""

    def test_half_way(self):
        """Test half the estimated time gives fifty percent."""
        assert estimate_reading_progress(500, MS_PER_MINUTE) == 50

    def test_clamped_to_hundred(self):
        """Test that progress never exceeds one hundred."""
        assert estimate_reading_progress(100, 10_000_000) == 100

    def test_rounds_half_up(self):
        """Test half-up rounding of the percentage."""
        # 7.5 s of a 60 s estimate is exactly 12.5 percent
        assert estimate_reading_progress(250, 7500) == 13

    @pytest.mark.parametrize("word_count,time_spent", [(0, 1000), (100, 0), (-1, 1000), (100, -1)])
    def test_non_positive_inputs(self, word_count, time_spent):
        """Test that missing words or time gives zero progress."""
        assert estimate_reading_progress(word_count, time_spent) == 0


class TestEstimateDocumentReadingTime:
    """Tests for estimate_document_reading_time."""

    def test_rounds_up_to_whole_minutes(self):
        """Test that partial minutes round up."""
        assert estimate_document_reading_time(251) == 2 * MS_PER_MINUTE

    def test_exact_minutes(self):
        """Test an exact number of minutes."""
        assert estimate_document_reading_time(500) == 2 * MS_PER_MINUTE

    def test_empty_document(self):
        """Test that an empty document takes no time."""
        assert estimate_document_reading_time(0) == 0

    def test_returns_int(self):
        """Test that the result is an integer of milliseconds."""
        assert isinstance(estimate_document_reading_time(123), int)
