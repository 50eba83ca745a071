from datetime import date, datetime, timedelta

import pytest

from priority_engine.config import Config
from priority_engine.scheduling import (
    FixedEventConflictError,
    blocking_events,
    can_be_postponed,
    check_fixed_conflicts,
    drop_expired,
    is_free,
    planning_order,
    postpone_incomplete,
    should_skip,
)
from priority_engine.schema import Event

NOW = datetime(2024, 3, 10, 12, 0)


def timed(title, start, minutes=60, **kwargs):
    return Event(title=title, start_datetime=start, end_datetime=start + timedelta(minutes=minutes), **kwargs)


def test_can_be_postponed():
    assert can_be_postponed(Event())
    assert not can_be_postponed(Event(is_set_event=True))


def test_planning_order_excludes_fixed_and_sorts():
    events = [
        Event(title="routine"),
        Event(title="work", is_set_event=True, is_important=True, deadline=date(2024, 3, 10)),
        Event(title="later deadline", is_urgent=True, deadline=date(2024, 3, 11)),
        Event(title="due today", deadline=date(2024, 3, 10)),
        Event(title="important", is_important=True),
        Event(title="urgent", is_urgent=True),
    ]
    ordered = planning_order(events, date(2024, 3, 10))
    assert [e.title for e in ordered] == ["due today", "later deadline", "important", "urgent", "routine"]
    assert events[1].priority == 1


def test_deadline_task_outranks_routine_day_before():
    routine = Event(title="routine", is_important=True, is_urgent=True)
    deadline_task = Event(title="report", deadline=date(2024, 3, 11))
    ordered = planning_order([routine, deadline_task], date(2024, 3, 10))
    assert ordered[0] is deadline_task


def test_should_skip_rules():
    start = datetime(2024, 3, 10, 9, 0)
    candidate = timed("candidate", start, priority=3, event_id=7)
    assert should_skip(candidate, candidate)
    assert should_skip(candidate, Event(start_datetime=start))
    assert should_skip(candidate, timed("same id", start, event_id=7, priority=3))
    assert should_skip(candidate, timed("p1 flexible", start))
    assert not should_skip(candidate, timed("p1 fixed", start, is_set_event=True))
    assert not should_skip(timed("p1 candidate", start), timed("p1 flexible", start))


def test_blocking_events_respects_margins():
    existing = timed("meeting", datetime(2024, 3, 10, 10, 0), priority=2, has_margin=True, margin_minutes=10)
    candidate = Event(title="new", priority=2)
    slot_start = datetime(2024, 3, 10, 11, 5)
    slot_end = slot_start + timedelta(minutes=30)

    assert blocking_events(candidate, [existing], slot_start, slot_end) == [existing]
    assert is_free(candidate, [existing], slot_start + timedelta(minutes=10), slot_end + timedelta(minutes=10))
    assert not is_free(candidate, [existing], datetime(2024, 3, 10, 11, 15), slot_end, margin=10)


def test_blocking_events_exclude_id():
    existing = timed("meeting", datetime(2024, 3, 10, 10, 0), priority=2, event_id=4)
    candidate = Event(priority=2)
    assert is_free(candidate, [existing], datetime(2024, 3, 10, 10, 0), datetime(2024, 3, 10, 11, 0), exclude_event_id=4)


def test_fixed_conflict_raises():
    a = timed("work", datetime(2024, 3, 10, 9, 0), 480, is_set_event=True)
    b = timed("dentist", datetime(2024, 3, 10, 15, 0), 60, is_set_event=True)
    flexible = timed("walk", datetime(2024, 3, 10, 10, 0))
    check_fixed_conflicts([a, flexible])
    with pytest.raises(FixedEventConflictError):
        check_fixed_conflicts([a, flexible, b])


def test_drop_expired():
    events = [
        Event(title="past", deadline=date(2024, 3, 9)),
        Event(title="today", deadline=date(2024, 3, 10)),
        Event(title="past hour", deadline=datetime(2024, 3, 10, 11, 0)),
        Event(title="done", deadline=date(2024, 3, 1), is_completed=True),
        Event(title="none"),
    ]
    assert [e.title for e in drop_expired(events, NOW)] == ["today", "done", "none"]


def test_postpone_incomplete():
    old_start = NOW - timedelta(days=2)
    stale = timed("stale", old_start, is_important=True)
    stale_no_end = Event(title="stale no end", start_datetime=old_start, duration_minutes=30, deadline=date(2024, 3, 11))
    expired = timed("expired", old_start, deadline=date(2024, 3, 9))
    fixed = timed("fixed", old_start, is_set_event=True)
    done = timed("done", old_start, is_completed=True)
    recent = timed("recent", NOW - timedelta(hours=3))

    kept, to_reschedule = postpone_incomplete([stale, stale_no_end, expired, fixed, done, recent], NOW)

    assert kept == [fixed, done, recent]
    assert [e.title for e in to_reschedule] == ["stale no end", "stale"]
    assert all(e.start_datetime is None and e.end_datetime is None for e in to_reschedule)
    assert stale_no_end.priority == 5
    assert stale.priority == 3


def test_postpone_threshold_is_configurable():
    event = timed("short", NOW - timedelta(hours=5))
    kept, to_reschedule = postpone_incomplete([event], NOW, postpone_after_hours=2)
    assert kept == [] and to_reschedule == [event]


def test_postpone_threshold_defaults_to_config(monkeypatch):
    monkeypatch.setattr(Config, "POSTPONE_AFTER_HOURS", 2)
    event = timed("short", NOW - timedelta(hours=5))
    kept, to_reschedule = postpone_incomplete([event], NOW)
    assert kept == [] and to_reschedule == [event]

    monkeypatch.setattr(Config, "POSTPONE_AFTER_HOURS", 48)
    recent = timed("recent", NOW - timedelta(hours=30))
    kept, to_reschedule = postpone_incomplete([recent], NOW)
    assert kept == [recent] and to_reschedule == []
