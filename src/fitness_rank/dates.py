"""Calendar helpers shared by aggregation, streaks and badge counters.

Every helper takes the evaluation instant explicitly; nothing here reads the clock.
"""

from __future__ import annotations

from datetime import date, datetime, timezone


def to_local(moment: datetime, now: datetime) -> datetime:
    """Express a log instant on the wall clock that `now` is expressed in.

    Naive datetimes are already local wall-clock time. Aware datetimes are
    converted to now's zone, or to the system zone when `now` is naive.
    """
    if moment.tzinfo is None:
        return moment
    if now.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(now.tzinfo)


def local_day(moment: datetime, now: datetime) -> date:
    """Local calendar day of a log instant."""
    return to_local(moment, now).date()


def parse_timestamp(raw: object) -> datetime | None:
    """Parse a stored log date.

    Accepts datetime objects, ISO-8601 strings, epoch seconds (or
    milliseconds), and Firestore timestamp exports like
    {"seconds": 1700000000, "nanoseconds": 0}. Returns None when unparseable.
    """
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime(raw.year, raw.month, raw.day)
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        seconds = raw / 1000 if raw > 100_000_000_000 else raw
        try:
            return datetime.fromtimestamp(seconds, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(raw, dict):
        seconds = raw.get("seconds", raw.get("_seconds"))
        if not isinstance(seconds, (int, float)) or isinstance(seconds, bool):
            return None
        nanos = raw.get("nanoseconds", raw.get("_nanoseconds", 0)) or 0
        if not isinstance(nanos, (int, float)) or isinstance(nanos, bool):
            return None
        return parse_timestamp(seconds + nanos / 1_000_000_000)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            return None
    return None
