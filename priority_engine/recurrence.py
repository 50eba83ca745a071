"""Recurring event expansion."""

from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Optional

from priority_engine.scheduling import is_free
from priority_engine.schema import Event
from priority_engine.timerange import get_effective_time_range, get_end_datetime

logger = logging.getLogger(__name__)


def _occurrence(template: Event, start: datetime) -> Event:
    occurrence = replace(
        template,
        start_datetime=start,
        end_datetime=None,
        end_date=None,
        end_time=None,
        deadline=None,
        is_completed=False,
        event_id=None,
    )
    occurrence.end_datetime = get_end_datetime(occurrence)
    return occurrence


def expand_recurring(events: list[Event], window_end: datetime, now: Optional[datetime] = None) -> list[Event]:
    """Return ``events`` plus the occurrences of recurring events up to ``window_end``.

    Occurrences follow the template every ``recurrence_interval_days`` days,
    starting one interval after the template. An occurrence whose slot (margin
    included) is already taken is skipped, not moved.
    """

    expanded = list(events)
    for template in events:
        if not template.is_recurring or template.recurrence_interval_days is None:
            continue
        if template.start_datetime is None:
            continue
        if template.recurrence_interval_days < 1:
            logger.warning(
                "Skipping %r: recurrence interval %d is not a positive number of days",
                template.title,
                template.recurrence_interval_days,
            )
            continue

        step = timedelta(days=template.recurrence_interval_days)
        current = template.start_datetime + step
        while current <= window_end:
            occurrence = _occurrence(template, current)
            start, end = get_effective_time_range(occurrence, now)
            if is_free(occurrence, expanded, start, end):
                expanded.append(occurrence)
            else:
                logger.debug("Occurrence of %r at %s is blocked, skipping", template.title, current)
            current += step
    return expanded
