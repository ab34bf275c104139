"""Tests for ISO 8601 format checks and comparisons."""

from datetime import date, datetime, timezone

import pytest

from syncgate.validation.iso8601 import (
    compare_dates,
    compare_times,
    compare_timezones,
    is_iso8601_date_string,
    is_iso8601_datetime_string,
    is_iso8601_time_string,
    is_iso8601_timezone_string,
    normalize_timezone,
)


class TestFormats:
    @pytest.mark.parametrize(
        "value",
        ["2018", "2018-06", "2018-06-30", "2018-06-30T13:45", "2018-06-30T13:45:10.5Z", "2018-06-30T13:45:10+09:30"],
    )
    def test_valid_datetimes(self, value):
        assert is_iso8601_datetime_string(value)

    @pytest.mark.parametrize("value", ["2018-13-01", "2018-02-30", "2018-06-30T24:00", "June 1", 20180630, None])
    def test_invalid_datetimes(self, value):
        assert not is_iso8601_datetime_string(value)

    def test_dates(self):
        assert is_iso8601_date_string("2016-02-29")
        assert not is_iso8601_date_string("2015-02-29")
        assert not is_iso8601_date_string("2016-02-29T00:00")

    def test_times(self):
        assert is_iso8601_time_string("23:59:59.999")
        assert is_iso8601_time_string("00:00")
        assert not is_iso8601_time_string("24:00")
        assert not is_iso8601_time_string("12:00Z")

    def test_timezones(self):
        assert is_iso8601_timezone_string("Z")
        assert is_iso8601_timezone_string("+05:30")
        assert is_iso8601_timezone_string("-0800")
        assert not is_iso8601_timezone_string("+24:00")
        assert not is_iso8601_timezone_string("05:30")


class TestComparisons:
    def test_partial_date_equals_first_day(self):
        assert compare_dates("2018", "2018-01-01") == 0

    def test_offsets_are_applied(self):
        assert compare_dates("2018-01-01T05:00:00+05:00", "2018-01-01T00:00:00Z") == 0

    def test_order(self):
        assert compare_dates("2017-12-31", "2018-01-01") < 0
        assert compare_dates("2018-01-01T00:00:00.001Z", "2018-01-01") > 0

    def test_date_objects(self):
        assert compare_dates(date(2018, 1, 1), "2018-01-01") == 0
        assert compare_dates(datetime(2018, 1, 1, tzinfo=timezone.utc), "2018") == 0

    def test_incomparable(self):
        assert compare_dates("not a date", "2018") is None
        assert compare_times("10:00", 10) is None
        assert compare_timezones("Z", "GMT") is None

    def test_times(self):
        assert compare_times("10:00", "10:00:00.000") == 0
        assert compare_times("09:59", "10:00") < 0
        assert compare_times("10:00:00.5", "10:00:00.499") > 0

    def test_timezones(self):
        assert compare_timezones("Z", "+00:00") == 0
        assert compare_timezones("-0800", "+01:00") < 0

    @pytest.mark.parametrize(
        "value, other",
        [("9999-12-31T23:59:59-01:00", "9999-12-31"), ("0001-01-01T00:30:00Z", "0001-01-01T00:00:00+01:00")],
    )
    def test_offsets_beyond_supported_years(self, value, other):
        assert is_iso8601_datetime_string(value)
        assert compare_dates(value, other) > 0

    def test_normalize_timezone(self):
        assert normalize_timezone("-05:30") == -330
        assert normalize_timezone("+0100") == 60
