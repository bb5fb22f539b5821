"""Unit tests for date/time helpers (levelup/utils/datetime_helpers.py)"""
import pytest
from datetime import date, datetime, timezone
from zoneinfo import ZoneInfo

from levelup.utils.datetime_helpers import get_timezone, now_utc, parse_date, today_in_timezone


def test_today_in_timezone_uses_local_day():
    """Test 02:00 UTC is still the previous day in New York"""
    instant = datetime(2024, 1, 15, 2, 0, tzinfo=timezone.utc)

    assert today_in_timezone("America/New_York", now=instant) == date(2024, 1, 14)
    assert today_in_timezone("Europe/Stockholm", now=instant) == date(2024, 1, 15)


def test_today_in_timezone_naive_is_utc():
    assert today_in_timezone("Asia/Tokyo", now=datetime(2024, 1, 15, 20, 0)) == date(2024, 1, 16)


def test_invalid_timezone_falls_back_to_default():
    assert get_timezone("Mars/Olympus") == ZoneInfo("UTC")
    assert get_timezone(None) == ZoneInfo("UTC")


def test_now_utc_is_aware():
    assert now_utc().utcoffset().total_seconds() == 0


def test_parse_date():
    assert parse_date("2024-02-29") == date(2024, 2, 29)

    with pytest.raises(ValueError):
        parse_date("29/02/2024")
