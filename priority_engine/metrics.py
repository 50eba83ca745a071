"""Calendar summary metrics."""

from __future__ import annotations

from collections import defaultdict
from datetime import datetime
from typing import Optional

import numpy as np

from priority_engine.schema import Event
from priority_engine.timerange import get_end_datetime, get_start_datetime


def compute_metrics(events: list[Event], now: Optional[datetime] = None) -> dict:
    """Compute completion, priority distribution and time spent per category."""

    if not events:
        return {
            "total_events": 0,
            "completed_rate": 0.0,
            "fixed_events": 0,
            "priority_counts": {p: 0 for p in range(1, 6)},
            "avg_priority": 0.0,
            "minutes_by_category": {},
        }

    now = now if now is not None else datetime.now()
    priorities = np.asarray([event.priority for event in events], dtype=int)
    counts = np.bincount(np.clip(priorities, 1, 5), minlength=6)

    minutes_by_category: dict[str, float] = defaultdict(float)
    for event in events:
        span = get_end_datetime(event, now) - get_start_datetime(event, now)
        minutes_by_category[event.category] += span.total_seconds() / 60.0

    return {
        "total_events": len(events),
        "completed_rate": float(np.mean([event.is_completed for event in events])),
        "fixed_events": sum(1 for event in events if event.is_set_event),
        "priority_counts": {p: int(counts[p]) for p in range(1, 6)},
        "avg_priority": float(priorities.mean()),
        "minutes_by_category": dict(minutes_by_category),
    }
