"""Helper utilities for timestamps and terminal output.

Functions:
    utcnow() -> datetime
        Current moment as a timezone-aware UTC datetime
    to_timestamp(moment) -> str
        Serialize a datetime as ISO-8601
    from_timestamp(value) -> datetime | None
        Parse an ISO-8601 timestamp; Go-style zero timestamps become None
    display_time(moment) -> str
        Format a datetime for terminal output ('YYYY-MM-DD HH:MM:SS', local time)

Example:
    >>> from urlsh.utils.helpers import from_timestamp, to_timestamp
    >>> to_timestamp(from_timestamp('2026-01-01T10:00:00Z'))
    '2026-01-01T10:00:00+00:00'
    >>> from_timestamp('0001-01-01T00:00:00Z') is None
    True
"""

from datetime import datetime, UTC


DISPLAY_FORMAT = '%Y-%m-%d %H:%M:%S'


def utcnow() -> datetime:
    return datetime.now(UTC)


def to_timestamp(moment: datetime) -> str:
    """Serialize `moment` as an ISO-8601 string (naive datetimes are assumed UTC)"""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.isoformat()


def from_timestamp(value: str) -> datetime | None:
    """Parse an ISO-8601 timestamp into a timezone-aware datetime

    Older versions of the tool wrote the zero time ('0001-01-01T00:00:00Z')
    for entries that were never clicked. Such values are read as None.

    Raises:
        ValueError: If `value` is not a valid ISO-8601 timestamp.
        TypeError: If `value` is not a string.
    """
    moment = datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    if moment.year == 1:
        return None
    return moment


def display_time(moment: datetime) -> str:
    return moment.astimezone().strftime(DISPLAY_FORMAT)
