"""
UTC-first datetime utilities.

- All datetimes are stored and processed in UTC
- ISO 8601 strings (microsecond precision, 'Z' suffix) for storage and responses
- Timezone-aware parsing and conversion

Usage:
    from core.datetime_utils import utc_now, parse_datetime, format_iso

    now = utc_now()
    dt = parse_datetime("2024-01-15T10:30:00+05:30")  # Converts to UTC
    iso_str = format_iso(dt)  # "2024-01-15T05:00:00.000000Z"
"""
import logging
from datetime import date, datetime, timezone
from typing import Optional, Union

logger = logging.getLogger(__name__)


# =============================================================================
# CORE UTILITIES
# =============================================================================

def utc_now() -> datetime:
    """Get current datetime in UTC with timezone info."""
    return datetime.now(timezone.utc)


def millis_now() -> int:
    """Milliseconds since the epoch, used for file names and report ids."""
    return int(utc_now().timestamp() * 1000)


def to_utc(dt: datetime) -> datetime:
    """
    Convert a datetime to UTC.

    - If datetime is naive (no timezone), assumes it's already UTC
    - If datetime has timezone, converts to UTC
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


# =============================================================================
# PARSING
# =============================================================================

def parse_datetime(value: Union[str, datetime]) -> datetime:
    """
    Parse a datetime value to UTC datetime.

    Accepts datetime objects, ISO 8601 strings (with or without timezone,
    'Z' suffix allowed) and the "YYYY-MM-DD HH:MM:SS" form SQLite produces
    for CURRENT_TIMESTAMP.

    Raises:
        ValueError: If the value cannot be parsed.
    """
    if isinstance(value, datetime):
        return to_utc(value)

    if not isinstance(value, str):
        raise ValueError(f"Expected datetime or string, got {type(value).__name__}")

    value = value.strip()
    if value.endswith('Z'):
        value = value[:-1] + '+00:00'

    try:
        return to_utc(datetime.fromisoformat(value))
    except ValueError:
        pass

    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d"):
        try:
            return datetime.strptime(value, fmt).replace(tzinfo=timezone.utc)
        except ValueError:
            continue

    raise ValueError(f"Cannot parse datetime: '{value}'")


def parse_datetime_safe(value: Union[str, datetime, None]) -> Optional[datetime]:
    """Parse datetime, returning None (and logging) instead of raising."""
    if value is None:
        return None
    try:
        return parse_datetime(value)
    except ValueError as e:
        logger.warning(f"Failed to parse datetime '{value}': {e}")
        return None


# =============================================================================
# FORMATTING
# =============================================================================

def format_iso(dt: datetime) -> str:
    """
    Format datetime to an ISO 8601 UTC string with microseconds.

    Microseconds keep records created within the same second ordered.

    Example:
        >>> format_iso(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '2024-01-15T10:30:00.000000Z'
    """
    return to_utc(dt).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def format_for_display(value: Union[datetime, date]) -> str:
    """
    Format a date for human-readable documents.

    Example:
        >>> format_for_display(datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc))
        '15 Jan 2024'
    """
    if isinstance(value, datetime):
        value = to_utc(value)
    return value.strftime("%d %b %Y")
