from __future__ import annotations

from datetime import timedelta

import pytest

from recording_check import format_bytes, format_timespan, parse_timespan


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (timedelta(0), "0ns"),
        (timedelta(microseconds=1), "1us"),
        (timedelta(milliseconds=500), "500ms"),
        (timedelta(seconds=30), "30s"),
        (timedelta(seconds=60), "1m"),
        (timedelta(seconds=90), "90s"),
        (timedelta(hours=2), "2h"),
        (timedelta(days=1), "1d"),
        (timedelta(days=14), "14d"),
        (timedelta(hours=36), "36h"),
    ],
)
def test_format_timespan_uses_largest_exact_unit(value: timedelta, expected: str) -> None:
    assert format_timespan(value) == expected


def test_format_timespan_appends_suffix() -> None:
    assert format_timespan(timedelta(minutes=5), " ago") == "5m ago"


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (1, "1 byte"),
        (512, "512 bytes"),
        (1023, "1023 bytes"),
        (1024, "1.0kB"),
        (1536, "1.5kB"),
        (1024**2, "1.0MB"),
        (262_144_000, "250.0MB"),
        (5 * 1024**3, "5.0GB"),
    ],
)
def test_format_bytes_scales_with_binary_prefixes(size: int, expected: str) -> None:
    assert format_bytes(size) == expected


def test_format_bytes_appends_suffix() -> None:
    assert format_bytes(2048, " max") == "2.0kB max"


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("500ms", timedelta(milliseconds=500)),
        ("30s", timedelta(seconds=30)),
        ("10m", timedelta(minutes=10)),
        ("2h", timedelta(hours=2)),
        ("1d", timedelta(days=1)),
        ("45", timedelta(seconds=45)),
        (1.5, timedelta(seconds=1.5)),
    ],
)
def test_parse_timespan(text, expected: timedelta) -> None:
    assert parse_timespan(text) == expected


@pytest.mark.parametrize("text", ["soon", "10 weeks", "-5s", True])
def test_parse_timespan_rejects_garbage(text) -> None:
    with pytest.raises(ValueError):
        parse_timespan(text)


@pytest.mark.parametrize("text", ["500ns", "1500ns", "0.5us"])
def test_parse_timespan_rejects_sub_microsecond_values(text: str) -> None:
    with pytest.raises(ValueError, match="whole number of microseconds"):
        parse_timespan(text)


def test_parse_timespan_accepts_whole_microseconds_in_nanoseconds() -> None:
    assert parse_timespan("2000ns") == timedelta(microseconds=2)
    assert format_timespan(parse_timespan("2000ns")) == "2us"


@pytest.mark.parametrize("value", ["99999999999d", 1e20])
def test_parse_timespan_out_of_range_is_value_error(value) -> None:
    with pytest.raises(ValueError, match="out of range"):
        parse_timespan(value)
