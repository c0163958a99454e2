import pytest
from tracker.utils.duration import format_duration, parse_duration


@pytest.mark.parametrize("text,minutes", [
    ("90m", 90),
    ("1d", 480),
    ("1w", 2400),
    ("1h 30m", 90),
    ("1.5h", 90),
    ("2h 15m", 135),
    ("0", 0),
    ("45", 45),
    ("1H 30M", 90),
    ("1h30m", 90),
    ("2d 4h", 1200),
    ("0.5m", 1),
])
def test_parse_duration(text, minutes):
    assert parse_duration(text) == minutes


@pytest.mark.parametrize("text", ["", "   ", "abc", "1x", "h", "-5", "1h abc", None])
def test_parse_duration_rejects(text):
    assert parse_duration(text) is None


@pytest.mark.parametrize("minutes,text", [
    (None, "0m"),
    (0, "0m"),
    (45, "45m"),
    (60, "1h"),
    (120, "2h"),
    (135, "2h 15m"),
    (2400, "40h"),
])
def test_format_duration(minutes, text):
    assert format_duration(minutes) == text


def test_formatted_duration_parses_back():
    assert parse_duration(format_duration(90)) == 90
