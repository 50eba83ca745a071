"""Core data schema for calendar events."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from priority_engine.categories import category_color, category_name


@dataclass
class Event:
    """Schedulable unit of work or activity.

    ``priority`` is both the cached result of the last priority computation and,
    when no urgency flag is set, a manual override input (see ``priority.py``).
    Fields are not validated here; the adapters own input validation.
    """

    title: Optional[str] = None
    description: Optional[str] = None
    start_datetime: Optional[datetime] = field(default_factory=datetime.now)
    end_datetime: Optional[datetime] = None
    end_date: Optional[date] = None
    end_time: Optional[time] = None
    duration_minutes: int = 60
    category_code: int = 0
    is_completed: bool = False
    is_recurring: bool = False
    recurrence_interval_days: Optional[int] = None
    deadline: Optional[date] = None
    has_margin: bool = False
    margin_minutes: Optional[int] = None
    is_important: bool = False
    is_urgent: bool = False
    is_set_event: bool = False
    priority: int = 1
    manual_priority: Optional[int] = None
    event_id: Optional[int] = None

    @property
    def category(self) -> str:
        return category_name(self.category_code)

    @property
    def color_code(self) -> str:
        return category_color(self.category_code)
