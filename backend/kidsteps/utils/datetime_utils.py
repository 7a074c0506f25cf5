"""
Timezone-aware datetime utilities.

Documents are stored as JSON, so timestamps travel as ISO 8601 strings in UTC.
Older documents written by the hosted store client may carry timestamps as
``{"seconds": ..., "nanoseconds": ...}`` mappings; both shapes are accepted
when reading.
"""

from datetime import datetime, timezone
from typing import Any, Optional

# UTC timezone constant
UTC = timezone.utc


def now_utc() -> datetime:
    """
    Get current UTC datetime (timezone-aware).

    Returns:
        datetime: Current UTC time with tzinfo set to UTC
    """
    return datetime.now(UTC)


def parse_iso_to_utc(iso_string: str) -> datetime:
    """
    Parse ISO datetime string to UTC timezone-aware datetime.

    Handles:
    - ISO strings with 'Z' suffix (UTC): "2024-01-20T09:00:00Z"
    - ISO strings with timezone offset: "2024-01-20T09:00:00+09:00"
    - Naive ISO strings (assumes UTC): "2024-01-20T09:00:00"
    - Plain dates (midnight UTC): "2024-01-20"

    Raises:
        ValueError: If the string cannot be parsed
    """
    # Replace 'Z' with '+00:00' for fromisoformat compatibility
    normalized = iso_string.strip().replace("Z", "+00:00")

    dt = datetime.fromisoformat(normalized)

    # If naive (no timezone info), assume UTC
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def ensure_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Ensure datetime is timezone-aware and in UTC.

    Naive datetimes are assumed to already be UTC.
    """
    if dt is None:
        return None

    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)

    return dt.astimezone(UTC)


def to_store_timestamp(dt: datetime) -> str:
    """Serialize a datetime for storage in a document."""
    return ensure_utc(dt).isoformat()


def from_store_timestamp(value: Any) -> Optional[datetime]:
    """
    Read a timestamp field from a document.

    Returns None for missing values or values that cannot be interpreted.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_utc(value)
    if isinstance(value, str):
        try:
            return parse_iso_to_utc(value)
        except ValueError:
            return None
    if isinstance(value, dict) and "seconds" in value:
        try:
            seconds = float(value["seconds"]) + float(value.get("nanoseconds", 0)) / 1e9
            return datetime.fromtimestamp(seconds, UTC)
        except (TypeError, ValueError, OverflowError, OSError):
            return None
    return None
