"""Display helpers."""
from datetime import datetime


def format_timestamp(value: datetime) -> str:
    """
    Format a timestamp for display, e.g. 'Jan 5, 2025, 02:30 PM'.

    Aware timestamps are converted to local time first.
    """
    if value.tzinfo is not None:
        value = value.astimezone()
    return f"{value:%b} {value.day}, {value:%Y, %I:%M %p}"
