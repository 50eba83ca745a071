"""Demo script for priority-engine."""

import json
import sys
from datetime import date, datetime
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from priority_engine.adapters.json_adapter import parse
from priority_engine.recurrence import expand_recurring
from priority_engine.scheduling import planning_order
from priority_engine.timerange import get_effective_time_range


def main() -> None:
    planning_date = date(2024, 3, 10)
    events = parse(str(Path(__file__).with_name("sample_events.json")))
    events = expand_recurring(events, datetime(2024, 3, 16, 23, 59))

    for event in planning_order(events, planning_date):
        start, end = get_effective_time_range(event)
        print(f"P{event.priority} {event.title:<16} {start:%a %H:%M}-{end:%H:%M} [{event.category}]")

    fixed = [event.title for event in events if event.is_set_event]
    print("Fixed:", json.dumps(fixed))


if __name__ == "__main__":
    main()
