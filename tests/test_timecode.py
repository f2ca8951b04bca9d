"""Tests for subtitle timestamp formatting."""

import re

import pytest

from subgen.subtitles.timecode import format_time, parse_time

SRT_TIMESTAMP_RE = re.compile(r"^\d{2}:\d{2}:\d{2},\d{3}$")


class TestFormatTime:
    def test_hours_minutes_seconds(self):
        assert format_time(3661.5, True, ",") == "01:01:01,500"

    def test_milliseconds_truncated_not_rounded(self):
        assert format_time(1.0009, True, ",") == "00:00:01,000"
        assert format_time(10.0996, True, ",") == "00:00:10,099"

    def test_zero(self):
        assert format_time(0.0, True, ",") == "00:00:00,000"

    def test_exact_fraction(self):
        assert format_time(2.5, True, ",") == "00:00:02,500"
        assert format_time(59.875, True, ",") == "00:00:59,875"

    def test_hours_omitted_when_zero(self):
        assert format_time(65.25) == "01:05.250"

    def test_hours_shown_when_nonzero(self):
        assert format_time(3600.0) == "01:00:00.000"
        assert format_time(7325.5) == "02:02:05.500"

    def test_custom_decimal_marker(self):
        assert format_time(1.5, False, ",") == "00:01,500"

    def test_negative_clamps_to_zero(self):
        assert format_time(-3.0, True, ",") == "00:00:00,000"

    @pytest.mark.parametrize("seconds", [0.0, 0.001, 0.5, 59.999, 3599.9, 86399.5, 123456.789])
    def test_srt_shape(self, seconds):
        assert SRT_TIMESTAMP_RE.match(format_time(seconds, True, ","))


class TestParseTime:
    def test_with_hours(self):
        assert parse_time("01:01:01,500") == 3661.5

    def test_without_hours(self):
        assert parse_time("01:05.250") == 65.25

    @pytest.mark.parametrize("bad", ["", "12", "1:2:3:4,000"])
    def test_invalid(self, bad):
        with pytest.raises(ValueError):
            parse_time(bad)
