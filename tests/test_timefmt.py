import pytest

from skybox.timefmt import format_time


def _parse(text):
    total = 0
    for part in text.split(":"):
        total = total * 60 + int(part)
    return total


def test_negative_is_unknown():
    assert format_time(-1) == "--:--"
    assert format_time(-3600) == "--:--"


def test_zero():
    assert format_time(0) == "00:00"


def test_pinned_values():
    assert format_time(125) == "02:05"
    assert format_time(3661) == "01:01:01"


@pytest.mark.parametrize("seconds", [1, 59, 60, 599, 3599])
def test_under_an_hour_has_two_fields(seconds):
    text = format_time(seconds)
    fields = text.split(":")
    assert len(fields) == 2
    assert all(len(f) == 2 for f in fields)
    assert _parse(text) == seconds


@pytest.mark.parametrize("seconds", [3600, 7322, 86399, 360000])
def test_an_hour_or_more_has_three_fields(seconds):
    text = format_time(seconds)
    fields = text.split(":")
    assert len(fields) == 3
    assert all(len(f) >= 2 for f in fields)
    assert _parse(text) == seconds