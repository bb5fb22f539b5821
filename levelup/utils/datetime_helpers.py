"""
Standardized Date/Time Handling Utilities

RULES:
- Completion timestamps are stored in UTC (use now_utc())
- Calendar days ("today", completion dates) are the user's local day
  (use today_in_timezone())
- Dates are serialized as YYYY-MM-DD
"""

import logging
from datetime import datetime, date
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from levelup import config

logger = logging.getLogger(__name__)


def get_timezone(tz_name: Optional[str]) -> ZoneInfo:
    """
    Resolve an IANA timezone name, falling back to the configured default

    Args:
        tz_name: IANA timezone (e.g., "Europe/Stockholm") or None

    Returns:
        ZoneInfo object
    """
    if not tz_name:
        tz_name = config.DEFAULT_TIMEZONE
        logger.debug(f"No timezone given, using {tz_name}")

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        logger.warning(f"Invalid timezone '{tz_name}': {e}. Using {config.DEFAULT_TIMEZONE}")
        return ZoneInfo(config.DEFAULT_TIMEZONE)


def now_utc() -> datetime:
    """
    Get current datetime in UTC (timezone-aware)
    """
    return datetime.now(ZoneInfo("UTC"))


def today_in_timezone(tz_name: Optional[str] = None, now: Optional[datetime] = None) -> date:
    """
    Get the calendar date for the user's local day

    Args:
        tz_name: IANA timezone of the user
        now: Instant to convert (defaults to the current time); naive values
            are treated as UTC

    Returns:
        Local calendar date
    """
    if now is None:
        now = now_utc()
    elif now.tzinfo is None:
        now = now.replace(tzinfo=ZoneInfo("UTC"))
        logger.warning(f"Received naive datetime, assuming UTC: {now}")
    return now.astimezone(get_timezone(tz_name)).date()


def parse_date(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string to a date

    Raises:
        ValueError: If date_str is not in YYYY-MM-DD format
    """
    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise ValueError(f"Invalid date format '{date_str}'. Expected YYYY-MM-DD") from e
