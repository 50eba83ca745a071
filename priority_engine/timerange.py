"""Start, end and margin-expanded time range resolution."""

from __future__ import annotations

from datetime import datetime, time, timedelta
from typing import Optional

from priority_engine.schema import Event


def _now(now: Optional[datetime]) -> datetime:
    return now if now is not None else datetime.now()


def _time_of_day(value) -> time:
    if isinstance(value, datetime):
        return value.time()
    return value


def get_start_datetime(event: Event, now: Optional[datetime] = None) -> datetime:
    """Return the explicit start, or ``now`` when the event has none."""

    if event.start_datetime is not None:
        return event.start_datetime
    return _now(now)


def get_end_datetime(event: Event, now: Optional[datetime] = None) -> datetime:
    """Resolve the end timestamp; the first satisfiable rule wins.

    1. explicit ``end_datetime``
    2. ``end_date`` combined with the time of day of ``end_time``
    3. ``start_datetime + duration_minutes``
    4. ``now + duration_minutes``
    """

    if event.end_datetime is not None:
        return event.end_datetime

    if event.end_date is not None and event.end_time is not None:
        return datetime.combine(event.end_date, _time_of_day(event.end_time))

    duration = timedelta(minutes=event.duration_minutes)
    if event.start_datetime is not None:
        return event.start_datetime + duration

    return _now(now) + duration


def get_effective_time_range(event: Event, now: Optional[datetime] = None) -> tuple[datetime, datetime]:
    """Return the occupied (start, end) pair, widened by the margin on both sides."""

    # One clock read so the start and end fallbacks agree.
    now = _now(now)
    start = get_start_datetime(event, now)
    end = get_end_datetime(event, now)
    if event.has_margin and event.margin_minutes is not None:
        margin = timedelta(minutes=event.margin_minutes)
        start -= margin
        end += margin
    return start, end


def is_timed(event: Event) -> bool:
    """True when the event carries both an explicit start and an explicit end."""

    return event.start_datetime is not None and event.end_datetime is not None


def overlaps(a: Event, b: Event) -> bool:
    """Check whether two timed events' effective ranges intersect."""

    if not is_timed(a) or not is_timed(b):
        return False
    a_start, a_end = get_effective_time_range(a)
    b_start, b_end = get_effective_time_range(b)
    return a_start < b_end and a_end > b_start
