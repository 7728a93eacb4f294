# Copyright 2026 GoEnums Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for lenient field value coercion."""

from datetime import datetime, timedelta, timezone

import pytest

from goenums.extraction.coercion import (
    ZERO_TIME,
    coerce,
    duration_literal,
    format_rfc3339,
    go_quote,
    parse_duration,
    parse_time,
)

# ###############
# Integers
# ###############


class TestIntegers:
    @pytest.mark.parametrize(
        ("raw", "tag", "expected"),
        [
            ("42", "int", 42),
            ("-5", "int", -5),
            ("+7", "int8", 7),
            ("127", "int8", 127),
            ("128", "int8", 0),
            ("-129", "int8", 0),
            ("255", "uint8", 255),
            ("256", "uint8", 0),
            ("-1", "uint", 0),
            ("+1", "uint16", 0),
            ("18446744073709551615", "uint64", 18446744073709551615),
            ("9223372036854775808", "int64", 0),
            ("12", "byte", 12),
            ("1.5", "int", 0),
            ("0x10", "int", 0),
            ("", "int32", 0),
            ("ten", "int", 0),
        ],
    )
    def test_parse(self, raw: str, tag: str, expected: int) -> None:
        value, literal = coerce(raw, tag)
        assert value == expected
        assert literal == str(expected)


# ###############
# Floats
# ###############


class TestFloats:
    @pytest.mark.parametrize(
        ("raw", "expected", "literal"),
        [
            ("9.8", 9.8, "9.8"),
            ("0.378", 0.378, "0.378"),
            ("1e3", 1000.0, "1000.0"),
            ("-2.5", -2.5, "-2.5"),
            (".5", 0.5, "0.5"),
            ("3", 3.0, "3.0"),
            ("-0", 0.0, "0.0"),
            ("abc", 0.0, "0.0"),
            ("inf", 0.0, "0.0"),
            ("NaN", 0.0, "0.0"),
            ("1e400", 0.0, "0.0"),
            ("", 0.0, "0.0"),
        ],
    )
    def test_float64(self, raw: str, expected: float, literal: str) -> None:
        assert coerce(raw, "float64") == (expected, literal)

    def test_float32_is_rounded_to_single_precision(self) -> None:
        value, _ = coerce("0.1", "float32")
        assert value != 0.1
        assert value == pytest.approx(0.1, rel=1e-7)

    def test_float32_overflow_is_zero(self) -> None:
        assert coerce("1e39", "float32") == (0.0, "0.0")


# ###############
# Booleans and Strings
# ###############


class TestBooleans:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("false", False), ("TRUE", False), ("True", False), ("1", False), ("", False)],
    )
    def test_parse(self, raw: str, expected: bool) -> None:
        assert coerce(raw, "bool") == (expected, "true" if expected else "false")


class TestStrings:
    def test_verbatim(self) -> None:
        assert coerce("Earth", "string") == ("Earth", '"Earth"')

    def test_empty_string_is_quoted(self) -> None:
        assert coerce("", "string") == ("", '""')

    def test_quotes_are_escaped(self) -> None:
        assert go_quote('say "hi"') == '"say \\"hi\\""'

    def test_non_ascii_is_kept(self) -> None:
        assert go_quote("größe") == '"größe"'


# ###############
# Durations
# ###############


class TestDurations:
    @pytest.mark.parametrize(
        ("raw", "nanos"),
        [
            ("0", 0),
            ("1h", 3_600_000_000_000),
            ("1h30m", 5_400_000_000_000),
            ("0.5h", 1_800_000_000_000),
            ("300ms", 300_000_000),
            ("-2s", -2_000_000_000),
            ("1.5us", 1_500),
            ("2µs", 2_000),
            ("10ns", 10),
            ("", 0),
            ("h", 0),
            ("1d", 0),
            ("5", 0),
            ("3000000h", 0),
        ],
    )
    def test_parse(self, raw: str, nanos: int) -> None:
        assert parse_duration(raw) == nanos

    @pytest.mark.parametrize(
        ("nanos", "literal"),
        [
            (0, "time.Hour * 0"),
            (7_200_000_000_000, "time.Hour * 2"),
            (5_400_000_000_000, "time.Minute * 90"),
            (90_000_000_000, "time.Second * 90"),
            (-2_000_000_000, "time.Second * -2"),
            (300_000_000, "time.Nanosecond * 300000000"),
        ],
    )
    def test_literal(self, nanos: int, literal: str) -> None:
        assert duration_literal(nanos) == literal

    def test_coerce(self) -> None:
        value, literal = coerce("1h30m", "time.Duration")
        assert value == timedelta(minutes=90)
        assert literal == "time.Minute * 90"

    def test_invalid_is_zero(self) -> None:
        assert coerce("soon", "time.Duration") == (timedelta(0), "time.Hour * 0")


# ###############
# Timestamps
# ###############


class TestTimestamps:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("2024-01-15T10:30:00Z", datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)),
            ("2024-01-15", datetime(2024, 1, 15, tzinfo=timezone.utc)),
            (
                "2024-01-15T10:30:00.123456789Z",
                datetime(2024, 1, 15, 10, 30, 0, 123456, tzinfo=timezone.utc),
            ),
            (
                "2024-01-15T10:30:00+02:00",
                datetime(2024, 1, 15, 10, 30, tzinfo=timezone(timedelta(hours=2))),
            ),
            ("Mon, 02 Jan 2006 15:04:05 MST", datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)),
            (
                "Mon, 02 Jan 2006 15:04:05 -0700",
                datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7))),
            ),
            ("02 Jan 06 15:04 MST", datetime(2006, 1, 2, 15, 4, tzinfo=timezone.utc)),
            (
                "02 Jan 06 15:04 +0100",
                datetime(2006, 1, 2, 15, 4, tzinfo=timezone(timedelta(hours=1))),
            ),
            ("Monday, 02-Jan-06 15:04:05 MST", datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone.utc)),
        ],
    )
    def test_layouts(self, raw: str, expected: datetime) -> None:
        assert parse_time(raw) == expected

    @pytest.mark.parametrize("raw", ["", "yesterday", "2024-13-01", "2024-02-30T00:00:00Z"])
    def test_invalid_is_zero_time(self, raw: str) -> None:
        assert parse_time(raw) == ZERO_TIME

    def test_format_utc(self) -> None:
        assert format_rfc3339(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)) == "2024-01-15T10:30:00Z"

    def test_format_offset(self) -> None:
        moment = datetime(2006, 1, 2, 15, 4, 5, tzinfo=timezone(timedelta(hours=-7, minutes=-30)))
        assert format_rfc3339(moment) == "2006-01-02T15:04:05-07:30"

    def test_format_zero_time(self) -> None:
        assert format_rfc3339(ZERO_TIME) == "0001-01-01T00:00:00Z"

    def test_coerce(self) -> None:
        value, literal = coerce("2024-01-15", "time.Time")
        assert value == datetime(2024, 1, 15, tzinfo=timezone.utc)
        assert literal == "2024-01-15T00:00:00Z"


# ###############
# Unknown Tags
# ###############


class TestUnknownTags:
    def test_raw_passthrough(self) -> None:
        assert coerce("Money{1}", "Money") == ("Money{1}", "Money{1}")
