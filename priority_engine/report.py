"""Planning-day report: ranked queue, fixed commitments and summary metrics."""

from __future__ import annotations

from datetime import date, datetime, time, timedelta
from typing import Optional

from priority_engine.config import Config
from priority_engine.metrics import compute_metrics
from priority_engine.priority import calculate_priority
from priority_engine.recurrence import expand_recurring
from priority_engine.scheduling import check_fixed_conflicts, drop_expired, planning_order
from priority_engine.schema import Event
from priority_engine.timerange import get_effective_time_range


def _describe(event: Event, now: datetime) -> dict:
    start, end = get_effective_time_range(event, now)
    return {
        "title": event.title,
        "priority": event.priority,
        "category": event.category,
        "color": event.color_code,
        "deadline": event.deadline.isoformat() if event.deadline else None,
        "effective_start": start.isoformat(),
        "effective_end": end.isoformat(),
    }


def build_report(
    events: list[Event],
    planning_date: date,
    now: Optional[datetime] = None,
    expand: bool = False,
    window_days: Optional[int] = None,
) -> dict:
    """Prepare events for planning on ``planning_date`` and summarize them."""

    now = now if now is not None else datetime.now()
    events = drop_expired(events, now)
    # Occurrences copy the template priority, so refresh it before expanding.
    for event in events:
        calculate_priority(event, planning_date)
    if expand:
        days = window_days if window_days is not None else Config.RECURRENCE_WINDOW_DAYS
        window_end = datetime.combine(planning_date, time.max) + timedelta(days=days)
        events = expand_recurring(events, window_end, now)
    check_fixed_conflicts(events)

    # Refreshes every priority, set events included.
    queue = planning_order(events, planning_date)
    fixed = [event for event in events if event.is_set_event]

    return {
        "planning_date": planning_date.isoformat(),
        "queue": [_describe(event, now) for event in queue],
        "fixed": [_describe(event, now) for event in fixed],
        "metrics": compute_metrics(events, now),
    }
