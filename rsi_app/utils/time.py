"""
Timestamp utilities for epoch-second market data.

Provider payloads carry epoch seconds; NSE history rows carry
``DD-Mon-YYYY`` date strings. All conversions here are UTC.
"""

from datetime import UTC, datetime
from typing import Any, Optional

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
                       "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def epoch_to_utc(timestamp: int) -> datetime:
    """
    Convert epoch seconds to a UTC datetime.

    Args:
        timestamp: Seconds since epoch

    Returns:
        Timezone-aware UTC datetime
    """
    return datetime.fromtimestamp(timestamp, tz=UTC)


def year_of(timestamp: int) -> int:
    """UTC calendar year of an epoch-second timestamp."""
    return epoch_to_utc(timestamp).year


def format_timestamp(timestamp: Optional[int]) -> Optional[str]:
    """ISO8601 rendering for log output; None passes through."""
    if timestamp is None:
        return None
    return epoch_to_utc(timestamp).isoformat()


def parse_nse_date(value: Any) -> Optional[int]:
    """
    Parse an NSE ``DD-Mon-YYYY`` date (e.g. ``27-Dec-2022``) to epoch seconds.

    The date is taken as UTC midnight.

    Args:
        value: Raw date string

    Returns:
        Epoch seconds, or None if the value cannot be parsed
    """
    if not isinstance(value, str):
        return None

    parts = value.strip().split("-")
    if len(parts) != 3:
        return None

    day_str, month_str, year_str = parts
    if month_str not in MONTH_ABBREVIATIONS:
        return None

    try:
        moment = datetime(int(year_str), MONTH_ABBREVIATIONS.index(month_str) + 1,
                          int(day_str), tzinfo=UTC)
    except ValueError:
        return None

    return int(moment.timestamp())
