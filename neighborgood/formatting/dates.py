"""
NeighborGood - Date Formatting

Converts the source's report timestamps (``2023-05-17T14:30:00.000Z``) into
display dates. Values that don't match the timestamp format are returned
unchanged, so callers can always render the result.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime

INPUT_FORMAT = "%Y-%m-%dT%H:%M:%S.%fZ"
DEFAULT_DISPLAY_FORMAT = "%Y-%m-%d"

# strptime's %f takes 1-6 digits; the source always sends milliseconds
_TIMESTAMP_SHAPE = re.compile(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z")


def parse_timestamp(value: str) -> datetime | None:
    """Parse a source timestamp as an aware UTC datetime, or None."""
    if not isinstance(value, str) or not _TIMESTAMP_SHAPE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, INPUT_FORMAT).replace(tzinfo=UTC)
    except ValueError:
        return None


def format_date(value: str, display_format: str = DEFAULT_DISPLAY_FORMAT) -> str:
    """
    Reformat a source timestamp for display.

    Args:
        value: Timestamp in ``yyyy-MM-dd'T'HH:mm:ss.SSS'Z'`` form
        display_format: strftime pattern for the output

    Returns:
        The formatted date, or ``value`` itself if it can't be parsed
    """
    parsed = parse_timestamp(value)
    if parsed is None:
        return value
    return parsed.strftime(display_format)
