"""Tests for the line model and timestamp helpers."""

import pytest

from subtiming.models import LinePayload, SubtitleLine
from subtiming.timecode import (
    TICKS_PER_MS,
    TICKS_PER_SECOND,
    format_timestamp,
    from_ms,
    from_seconds,
    to_ms,
    to_seconds,
)


class TestTimecode:
    """Tests for tick conversions."""

    def test_resolution(self):
        assert TICKS_PER_MS == 10_000
        assert TICKS_PER_SECOND == 10_000_000

    def test_from_seconds(self):
        assert from_seconds(1.5) == 15_000_000
        assert from_seconds(-0.25) == -2_500_000

    def test_from_ms_keeps_sub_millisecond(self):
        assert from_ms(0.5) == 5_000
        assert from_ms(1.2345) == 12_345

    def test_to_units(self):
        assert to_seconds(25_000_000) == 2.5
        assert to_ms(12_345) == 1.2345

    def test_format(self):
        assert format_timestamp(from_ms(3723004)) == "1:02:03.004"
        assert format_timestamp(0) == "0:00:00.000"

    def test_format_negative(self):
        assert format_timestamp(from_ms(-1500)) == "-0:00:01.500"


class TestSubtitleLine:
    """Tests for SubtitleLine."""

    def test_plain_text_strips_override_tags(self):
        line = SubtitleLine(text="{\\an8}{\\b1}Hello{\\b0} world")
        assert line.plain_text == "Hello world"

    def test_plain_text_line_breaks(self):
        line = SubtitleLine(text="First\\NSecond\\nThird")
        assert line.plain_text == "First Second Third"

    def test_plain_text_empty(self):
        assert SubtitleLine().plain_text == ""

    def test_duration(self):
        line = SubtitleLine(start=from_seconds(1), end=from_seconds(3.5))
        assert line.duration == from_seconds(2.5)
        assert line.duration_seconds == 2.5

    def test_cps(self):
        line = SubtitleLine(start=0, end=from_seconds(2), text="A" * 30)
        assert line.cps == 15.0

    def test_cps_zero_duration(self):
        line = SubtitleLine(start=from_seconds(1), end=from_seconds(1), text="Hello")
        assert line.cps == 0.0

    def test_clone_is_independent(self):
        line = SubtitleLine(index=3, start=0, end=from_seconds(1), text="Hi", is_selected=True)
        copy = line.clone()
        copy.end = from_seconds(5)

        assert copy is not line
        assert copy.text == "Hi"
        assert copy.is_selected
        assert line.end == from_seconds(1)


class TestLinePayload:
    """Tests for the HTTP line representation."""

    def test_to_line(self):
        payload = LinePayload(index=2, start_ms=1000.5, end_ms=2000, text="Hi")
        line = payload.to_line()

        assert line.index == 2
        assert line.start == 10_005_000
        assert line.end == 20_000_000
        assert line.text == "Hi"

    def test_from_line(self):
        line = SubtitleLine(index=1, start=15_000, end=from_seconds(2), text="Hi", is_selected=True)
        payload = LinePayload.from_line(line)

        assert payload.start_ms == 1.5
        assert payload.end_ms == 2000.0
        assert payload.is_selected

    def test_missing_times_rejected(self):
        with pytest.raises(ValueError):
            LinePayload(text="no times")
