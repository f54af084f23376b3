"""UTC timestamp helpers.

The API speaks unix seconds everywhere (``dt``, ``created_at``, ``start``/``end``).
"""

from datetime import UTC, datetime


def from_utc(seconds: int) -> datetime:
    """Convert a unix timestamp in seconds to an aware UTC datetime."""
    return datetime.fromtimestamp(seconds, tz=UTC)


def to_utc(dt: datetime) -> int:
    """Convert a datetime to unix seconds. Naive datetimes are taken as UTC."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return int(dt.timestamp())
