"""
UTC time helpers. DB columns hold naive UTC datetimes; the wire format is epoch milliseconds.
"""
from datetime import datetime, timedelta, timezone


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (what SQLite/MySQL DateTime columns store)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


_EPOCH = datetime(1970, 1, 1)
_ONE_MS = timedelta(milliseconds=1)


def to_epoch_ms(value: datetime | None) -> int:
    """Naive-UTC datetime -> epoch milliseconds (floored). None -> 0."""
    if value is None:
        return 0
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return (value - _EPOCH) // _ONE_MS


def next_write_time(previous: datetime | None) -> datetime:
    """
    Timestamp for a new write that is at least one millisecond past `previous`,
    so consecutive writes always report a strictly larger epoch-ms value.
    """
    now = utcnow()
    if previous is not None and to_epoch_ms(now) <= to_epoch_ms(previous):
        return previous + timedelta(milliseconds=1)
    return now
