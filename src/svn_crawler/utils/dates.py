"""Date formatting for index payloads."""

from datetime import datetime, timezone


def format_date(value: datetime | None) -> str | None:
    """Format a datetime as ``yyyy-MM-ddTHH:mm:ss.SSS+ZZZZ``.

    Naive datetimes are taken as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    millis = value.microsecond // 1000
    return f"{value:%Y-%m-%dT%H:%M:%S}.{millis:03d}{value:%z}"


def parse_svn_date(value: str | None) -> datetime | None:
    """Parse a date from ``svn --xml`` output, e.g. ``2013-05-01T12:00:00.123456Z``."""
    if not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)
