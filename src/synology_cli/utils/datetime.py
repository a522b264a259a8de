"""Date and time formatting utilities for Synology CLI.

DSM reports capture times as Unix epoch seconds and scheduled task times
as ``YYYY/MM/DD HH:MM`` strings; both are normalised to UTC here.
"""

from datetime import datetime, timezone
from typing import Any, Optional


def parse_dsm_datetime(value: Any) -> Optional[datetime]:
    """Parse datetime from the formats DSM uses.

    Args:
        value: Epoch seconds, a DSM date string, or a datetime

    Returns:
        Parsed datetime in UTC, or None if value is empty/invalid

    Examples:
        >>> parse_dsm_datetime(1700000000)
        datetime.datetime(2023, 11, 14, 22, 13, 20, tzinfo=datetime.timezone.utc)

        >>> parse_dsm_datetime("2023/11/14 22:13")
        datetime.datetime(2023, 11, 14, 22, 13, tzinfo=datetime.timezone.utc)
    """
    if value is None or value == "" or value == 0:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    # bool is an int subclass but never a timestamp
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (ValueError, OSError, OverflowError):
            return None

    if isinstance(value, str):
        for fmt in ("%Y/%m/%d %H:%M", "%Y/%m/%d %H:%M:%S", "%Y-%m-%d %H:%M:%S"):
            try:
                return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
            except ValueError:
                continue
        try:
            dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    return None


def format_datetime(value: Any, format_type: str = "human") -> str:
    """Format datetime value for display.

    Args:
        value: Datetime value to format
        format_type: "human" ("2023-11-14 22:13:20 UTC") or "iso"

    Returns:
        Formatted string, "N/A" when the value cannot be parsed
    """
    dt = parse_dsm_datetime(value)
    if dt is None:
        return "N/A"

    if format_type == "iso":
        return dt.isoformat()
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")
