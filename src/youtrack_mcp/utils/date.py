"""Utility functions for date operations."""

import logging
import re
from datetime import datetime, timezone

import dateutil.parser

logger = logging.getLogger("youtrack-mcp")

YMD_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: str | int | None, format_string: str = "%Y-%m-%d") -> str:
    """
    Format a YouTrack timestamp or date string.

    YouTrack reports timestamps as epoch milliseconds. ISO 8601 strings and
    any other format `dateutil.parser` understands are accepted too.

    Args:
        value: Epoch milliseconds, a date string, or None
        format_string: The output format (default: "%Y-%m-%d")

    Returns:
        Formatted date string, an empty string for None, or the original
        value when it cannot be parsed
    """
    if value is None or value == "":
        return ""

    text = str(value)
    try:
        if text.isdigit():
            date = datetime.fromtimestamp(int(text) / 1000, tz=timezone.utc)
        else:
            date = dateutil.parser.parse(text)
        return date.strftime(format_string)
    except (ValueError, TypeError, OverflowError) as e:
        logger.debug(f"Could not parse date '{text}': {e}")

    return text


def is_ymd(date_str: str) -> bool:
    """Return True when the string is a valid calendar date in YYYY-MM-DD form."""
    if not YMD_PATTERN.match(date_str or ""):
        return False
    try:
        dateutil.parser.isoparse(date_str)
    except ValueError:
        return False
    return True


def ymd_to_millis(date_str: str) -> int:
    """
    Convert a YYYY-MM-DD date to epoch milliseconds at UTC midnight.

    Raises:
        ValueError: If the string is not a valid YYYY-MM-DD date
    """
    if not is_ymd(date_str):
        raise ValueError(f"Invalid date '{date_str}'. Expected YYYY-MM-DD.")
    date = dateutil.parser.isoparse(date_str).replace(tzinfo=timezone.utc)
    return int(date.timestamp() * 1000)


def today_millis() -> int:
    """Epoch milliseconds for today's date at UTC midnight."""
    return ymd_to_millis(datetime.now(timezone.utc).strftime("%Y-%m-%d"))
