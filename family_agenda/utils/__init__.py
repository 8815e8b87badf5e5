"""
Utility functions for family-agenda.
"""

from .io import read_json, safe_write_json
from .date import (
    parse_date, parse_month, parse_time, parse_datetime,
    format_date, format_time, as_date, is_same_month, month_days
)
from .retry import RetryPolicy

__all__ = [
    # I/O utilities
    'read_json',
    'safe_write_json',
    # Date utilities
    'parse_date',
    'parse_month',
    'parse_time',
    'parse_datetime',
    'format_date',
    'format_time',
    'as_date',
    'is_same_month',
    'month_days',
    # Retry
    'RetryPolicy'
]
