from __future__ import annotations
from typing import Iterator, Optional, Tuple
import pandas as pd
from .errors import InvalidInputError

SECONDS_PER_HOUR = 3600
SECONDS_PER_DAY = 86400


def to_timestamp(value, name: str = "date") -> pd.Timestamp:
    """Coerce a datetime-like value to a Timestamp, rejecting missing/NaT values."""
    if value is None:
        raise InvalidInputError(f"{name} is required")
    try:
        ts = pd.Timestamp(value)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} is not a valid timestamp: {value!r}") from e
    if pd.isna(ts):
        raise InvalidInputError(f"{name} is NaT")
    return ts


def require_same_tz_kind(**stamps: pd.Timestamp) -> None:
    """Reject a mix of naive and timezone-aware timestamps."""
    if len({ts.tz is None for ts in stamps.values()}) > 1:
        names = " and ".join(stamps)
        raise InvalidInputError(f"{names} must all be naive or all timezone-aware")


def validate_range(start_date, end_date) -> Tuple[pd.Timestamp, pd.Timestamp]:
    # An empty or inverted range is allowed; generators simply produce nothing.
    start = to_timestamp(start_date, "start_date")
    end = to_timestamp(end_date, "end_date")
    require_same_tz_kind(start_date=start, end_date=end)
    return start, end


def add_seconds(ts: pd.Timestamp, seconds: float) -> pd.Timestamp:
    # Absolute elapsed time (Timedelta arithmetic is not wall-clock on aware stamps).
    return ts + pd.Timedelta(seconds=seconds)


def add_days(ts: pd.Timestamp, days: int) -> pd.Timestamp:
    # Calendar days: keeps the local wall-clock time across DST changes.
    return ts + pd.DateOffset(days=days)


def at_hour(ts: pd.Timestamp, hour: int) -> pd.Timestamp:
    return ts.replace(hour=hour, minute=0, second=0, microsecond=0, nanosecond=0)


def now_like(ts: Optional[pd.Timestamp] = None) -> pd.Timestamp:
    """Current wall-clock time, naive or aware to match ``ts``."""
    tz = ts.tz if ts is not None else None
    return pd.Timestamp.now(tz=tz)


def iter_every(start: pd.Timestamp, end: pd.Timestamp, seconds: float) -> Iterator[pd.Timestamp]:
    current = start
    while current < end:
        yield current
        current = add_seconds(current, seconds)


def iter_days(start: pd.Timestamp, end: pd.Timestamp) -> Iterator[pd.Timestamp]:
    current = start
    while current < end:
        yield current
        current = add_days(current, 1)
