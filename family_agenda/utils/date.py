"""
Date and time-of-day parsing and formatting utilities.
"""

from datetime import date, datetime, time, timedelta
from typing import Optional, Tuple, Union


def parse_date(date_str: Optional[str]) -> Optional[date]:
    """
    Parse a date string into a date object.

    Handles various formats:
    - ISO format (YYYY-MM-DD)
    - ISO datetime (YYYY-MM-DDTHH:MM:SS)

    Args:
        date_str: Date string to parse

    Returns:
        Parsed date object or None if invalid
    """
    if not date_str or not isinstance(date_str, str):
        return None

    # Take only date part if it's a datetime string
    if 'T' in date_str:
        date_str = date_str.split('T')[0]

    # Remove timezone if present
    date_str = date_str.split('+')[0].split('Z')[0].strip()

    try:
        return datetime.strptime(date_str, '%Y-%m-%d').date()
    except ValueError:
        pass

    try:
        # Try with single digit month/day
        parts = date_str.split('-')
        if len(parts) == 3:
            return date(int(parts[0]), int(parts[1]), int(parts[2]))
    except (ValueError, IndexError):
        pass

    return None


def parse_month(month_str: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM`` into the first day of that month."""
    if not month_str:
        return None
    try:
        return datetime.strptime(month_str.strip(), '%Y-%m').date()
    except ValueError:
        return None


def parse_time(time_str: Optional[str]) -> Optional[time]:
    """
    Parse a time-of-day string (HH:MM or HH:MM:SS) into a time object.

    Returns None for empty or invalid input, which means "all day".
    """
    if not time_str or not isinstance(time_str, str):
        return None

    for fmt in ('%H:%M:%S', '%H:%M'):
        try:
            return datetime.strptime(time_str.strip(), fmt).time()
        except ValueError:
            continue
    return None


def parse_datetime(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp; datetimes pass through unchanged."""
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        # fromisoformat does not accept a trailing Z before Python 3.11
        return datetime.fromisoformat(value.replace('Z', '+00:00'))
    except ValueError:
        return None


def format_date(d: Optional[date]) -> Optional[str]:
    """Format a date object as ISO string (YYYY-MM-DD)."""
    if not d:
        return None
    return d.strftime('%Y-%m-%d')


def format_time(t: Optional[time]) -> Optional[str]:
    """Format a time-of-day as HH:MM, or None for all-day."""
    if t is None:
        return None
    return t.strftime('%H:%M')


def as_date(value: Union[date, datetime]) -> date:
    """Reduce a datetime to its calendar day; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def is_same_month(first: date, second: date) -> bool:
    """True if both dates fall in the same calendar month of the same year."""
    return first.year == second.year and first.month == second.month


def month_days(displayed: date) -> Tuple[date, date]:
    """Return the first and last day of the month containing ``displayed``."""
    first = displayed.replace(day=1)
    if first.month == 12:
        next_first = first.replace(year=first.year + 1, month=1)
    else:
        next_first = first.replace(month=first.month + 1)
    return first, next_first - timedelta(days=1)
