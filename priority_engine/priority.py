"""Priority derivation: urgency flags, manual overrides and deadline escalation."""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from priority_engine.schema import Event

FIXED_PRIORITY = 1
MAX_FLAG_PRIORITY = 4
DEADLINE_PRIORITY = 5
DEADLINE_ESCALATION_DAYS = 1
_OVERRIDE_RANGE = (2, 3, 4)


def _as_date(value: date) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def days_until_deadline(deadline: date, reference_date: date) -> int:
    """Whole calendar days from ``reference_date`` to ``deadline``.

    Time of day is dropped on both sides before subtracting, so 23:59 today and
    00:01 tomorrow are one day apart.
    """

    return (_as_date(deadline) - _as_date(reference_date)).days


def _base_priority(event: Event) -> int:
    has_any_flag = event.is_important or event.is_urgent
    if not has_any_flag:
        if event.manual_priority in _OVERRIDE_RANGE:
            return event.manual_priority
        if event.priority in _OVERRIDE_RANGE:
            return event.priority

    priority = 1
    if event.is_important:
        priority += 2
    if event.is_urgent:
        priority += 1
    return min(priority, MAX_FLAG_PRIORITY)


def derive_priority(event: Event, reference_date: date) -> int:
    """Compute the priority of ``event`` for ``reference_date`` without storing it."""

    if event.is_set_event:
        return FIXED_PRIORITY

    priority = _base_priority(event)
    if event.deadline is not None:
        if days_until_deadline(event.deadline, reference_date) <= DEADLINE_ESCALATION_DAYS:
            priority = DEADLINE_PRIORITY
    return priority


def calculate_priority(event: Event, reference_date: Optional[date] = None) -> int:
    """Compute, store on the event and return its priority (1..5).

    Set events are always 1. Otherwise the base is a manual 2..4 value when no
    urgency flag is set (``manual_priority`` first, then the stored priority;
    a ``manual_priority`` outside 2..4 is ignored), else 1 + 2 (important)
    + 1 (urgent) capped at 4. A deadline today, tomorrow or already past
    forces 5.
    """

    if reference_date is None:
        reference_date = date.today()
    event.priority = derive_priority(event, reference_date)
    return event.priority
