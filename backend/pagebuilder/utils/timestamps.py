from datetime import datetime, timezone
from typing import Any, Optional

from dateutil.parser import isoparse


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def normalize_ts(ts: datetime) -> datetime:
    """
    Ensure datetime is timezone-aware.
    Defaults to UTC if naive.
    """
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def to_iso(ts: Optional[datetime]) -> Optional[str]:
    if ts is None:
        return None
    return normalize_ts(ts).isoformat()


def parse_ts(value: Any) -> datetime:
    """
    Parse an ISO-8601 string (or pass a datetime through).

    Raises ValueError for anything that is not a timestamp.
    """
    if isinstance(value, datetime):
        return normalize_ts(value)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Not an ISO-8601 timestamp: {value!r}")
    return normalize_ts(isoparse(value))


def coerce_ts(value: Any, default: Optional[datetime] = None) -> Any:
    """
    Lenient variant used when loading stored or client data.

    Missing values fall back to ``default`` (now, when not given); values
    that cannot be parsed are returned untouched so validation can report them.
    """
    if value is None or value == "":
        return default or utcnow()
    try:
        return parse_ts(value)
    except (ValueError, OverflowError):
        return value
