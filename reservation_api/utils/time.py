import re
from datetime import datetime, timezone

_EPOCH_RE = re.compile(r"^-?\d+$")

def parse_iso(s: str) -> datetime:
    """Parses an ISO 8601 string, handling 'Z' for UTC."""
    s = s.strip()
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    return datetime.fromisoformat(s)

def parse_epoch_ms(s: str) -> datetime:
    """Parses an integer count of milliseconds since the epoch into naive UTC.

    Raises ValueError for anything that is not a plain (optionally negative)
    integer or that falls outside the representable range.
    """
    s = s.strip()
    if not _EPOCH_RE.match(s):
        raise ValueError(f"{s!r} is not an integer epoch value")
    try:
        dt = datetime.fromtimestamp(int(s) / 1000, tz=timezone.utc)
    except (OverflowError, OSError) as e:
        raise ValueError(f"{s!r} is out of range") from e
    return dt.replace(tzinfo=None)

def to_utc(dt: datetime) -> datetime:
    """Converts a naive datetime to a timezone-aware UTC datetime."""
    return dt if dt.tzinfo is not None else dt.replace(tzinfo=timezone.utc)

def db_utc_naive(dt: datetime) -> datetime:
    """Converts a timezone-aware datetime to a naive UTC datetime for DB storage."""
    return to_utc(dt).astimezone(timezone.utc).replace(tzinfo=None)

def utc_now() -> datetime:
    """Current time as naive UTC, truncated to whole seconds."""
    return datetime.now(timezone.utc).replace(tzinfo=None, microsecond=0)

def to_epoch_ms(dt: datetime) -> int:
    return int(to_utc(dt).timestamp() * 1000)

def api_iso_z(dt: datetime) -> str:
    """Formats a datetime into an ISO 8601 string ending in 'Z' for API responses."""
    return to_utc(dt).astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
