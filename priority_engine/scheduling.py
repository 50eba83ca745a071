"""Planner-facing helpers: postponability, conflicts and planning order.

These helpers prepare and check events for a planner; they never assign start
times themselves.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from priority_engine.config import Config
from priority_engine.priority import calculate_priority
from priority_engine.schema import Event
from priority_engine.timerange import get_effective_time_range, get_end_datetime, is_timed, overlaps

logger = logging.getLogger(__name__)


class FixedEventConflictError(ValueError):
    """Two set events occupy overlapping time."""

    def __init__(self, first: Event, second: Event):
        super().__init__(f"Fixed event {second.title!r} conflicts with fixed event {first.title!r}")
        self.first = first
        self.second = second


def can_be_postponed(event: Event) -> bool:
    """Only flexible (non-set) events may be moved by a planner."""

    return not event.is_set_event


def _deadline_moment(deadline: date) -> datetime:
    if isinstance(deadline, datetime):
        return deadline
    return datetime.combine(deadline, datetime.min.time())


def _deadline_passed(event: Event, now: datetime) -> bool:
    if event.deadline is None:
        return False
    if isinstance(event.deadline, datetime):
        return event.deadline < now
    # A plain date is due until the end of that day.
    return event.deadline < now.date()


def _order_key(event: Event) -> tuple:
    if event.deadline is None:
        return (-event.priority, 1, datetime.max)
    return (-event.priority, 0, _deadline_moment(event.deadline))


def should_skip(candidate: Event, existing: Event) -> bool:
    """Return True when ``existing`` cannot block ``candidate``."""

    if existing is candidate:
        return True
    if not is_timed(existing):
        return True
    if candidate.event_id is not None and existing.event_id == candidate.event_id:
        return True

    # Flexible P1 events give way to anything more important.
    existing_is_p1_flexible = existing.priority == 1 and not existing.is_set_event
    candidate_above_p1 = candidate.priority > 1 or candidate.is_set_event
    return existing_is_p1_flexible and candidate_above_p1


def blocking_events(
    candidate: Event,
    events: Iterable[Event],
    slot_start: datetime,
    slot_end: datetime,
    margin: int = 0,
    exclude_event_id: Optional[int] = None,
) -> list[Event]:
    """List the events whose effective range intersects the candidate's slot.

    The slot is widened by ``margin`` minutes on both sides; existing events are
    compared with their own margins applied.
    """

    window_start = slot_start - timedelta(minutes=margin)
    window_end = slot_end + timedelta(minutes=margin)

    blocking = []
    for existing in events:
        if should_skip(candidate, existing):
            continue
        if exclude_event_id is not None and existing.event_id == exclude_event_id:
            continue
        ex_start, ex_end = get_effective_time_range(existing)
        if window_start < ex_end and window_end > ex_start:
            blocking.append(existing)
    return blocking


def is_free(
    candidate: Event,
    events: Iterable[Event],
    slot_start: datetime,
    slot_end: datetime,
    margin: int = 0,
    exclude_event_id: Optional[int] = None,
) -> bool:
    return not blocking_events(candidate, events, slot_start, slot_end, margin, exclude_event_id)


def check_fixed_conflicts(events: Iterable[Event]) -> None:
    """Raise ``FixedEventConflictError`` if any two timed set events overlap."""

    seen: list[Event] = []
    for event in events:
        if not event.is_set_event or not is_timed(event):
            continue
        for other in seen:
            if overlaps(other, event):
                raise FixedEventConflictError(other, event)
        seen.append(event)


def drop_expired(events: Iterable[Event], now: Optional[datetime] = None) -> list[Event]:
    """Remove incomplete events whose deadline is already behind ``now``."""

    now = now if now is not None else datetime.now()
    kept = []
    for event in events:
        if not event.is_completed and _deadline_passed(event, now):
            logger.info("Dropping %r: deadline %s has passed", event.title, event.deadline)
            continue
        kept.append(event)
    return kept


def planning_order(events: Iterable[Event], planning_date: date) -> list[Event]:
    """Recompute priorities for ``planning_date`` and order the flexible events.

    Set events get their priority refreshed but are left out of the result.
    Ordering is priority descending, then earliest deadline, undated last.
    """

    flexible = []
    for event in events:
        calculate_priority(event, planning_date)
        if can_be_postponed(event):
            flexible.append(event)
    return sorted(flexible, key=_order_key)


def _overdue_end(event: Event) -> Optional[datetime]:
    if event.end_datetime is not None:
        return get_end_datetime(event)
    if event.start_datetime is not None:
        return event.start_datetime + timedelta(minutes=event.duration_minutes)
    return None


def postpone_incomplete(
    events: Iterable[Event],
    now: Optional[datetime] = None,
    postpone_after_hours: Optional[float] = None,
) -> tuple[list[Event], list[Event]]:
    """Split events into those kept in place and those needing a new slot.

    An incomplete flexible event whose end lies at least ``postpone_after_hours``
    in the past loses its start and end and is queued for rescheduling, unless
    its deadline has already passed, in which case it is dropped. The threshold
    defaults to ``Config.POSTPONE_AFTER_HOURS``.
    """

    now = now if now is not None else datetime.now()
    if postpone_after_hours is None:
        postpone_after_hours = Config.POSTPONE_AFTER_HOURS
    threshold = timedelta(hours=postpone_after_hours)

    kept: list[Event] = []
    to_reschedule: list[Event] = []
    for event in events:
        end = _overdue_end(event)
        if event.is_completed or end is None or now - end < threshold or not can_be_postponed(event):
            kept.append(event)
            continue

        if _deadline_passed(event, now):
            logger.info("Dropping overdue %r: deadline %s has passed", event.title, event.deadline)
            continue

        event.start_datetime = None
        event.end_datetime = None
        to_reschedule.append(event)

    if to_reschedule:
        logger.info("Postponing %d incomplete event(s)", len(to_reschedule))
    return kept, planning_order(to_reschedule, now.date())
